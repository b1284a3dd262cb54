"""Resolve the component name a source file defines."""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Optional

from tree_sitter import Node

from .parser import SyntaxTree, walk

_PASCAL_CASE = re.compile(r"^[A-Z][A-Za-z0-9]*$")

_FUNCTION_VALUES = {"arrow_function", "function_expression", "function"}


def is_pascal_case(name: str) -> bool:
    return bool(_PASCAL_CASE.match(name))


def file_base_name(path: str) -> str:
    """Return the file name up to its first dot (``Button.test.tsx`` -> ``Button``)."""
    return PurePath(path.replace("\\", "/")).name.split(".", 1)[0]


def resolve_component_name(path: str, tree: SyntaxTree) -> Optional[str]:
    """Return the canonical component name for ``tree`` or ``None``.

    Candidates are, in order of precedence: the first PascalCase function
    declaration, the first PascalCase variable bound to an arrow function or
    function expression, and finally the file name when the default export is
    an anonymous function. A found name that differs from a PascalCase file
    name is reported as ``"Found (FileName)"``.
    """
    base_name = file_base_name(path)
    declared: Optional[str] = None
    assigned: Optional[str] = None
    anonymous_default = False

    for node in walk(tree.root):
        kind = node.type
        if kind == "function_declaration" and declared is None:
            name = _identifier_text(tree, node.child_by_field_name("name"))
            if name and is_pascal_case(name):
                declared = name
        elif kind == "variable_declarator" and assigned is None:
            name = _identifier_text(tree, node.child_by_field_name("name"))
            value = node.child_by_field_name("value")
            if name and is_pascal_case(name) and value is not None and value.type in _FUNCTION_VALUES:
                assigned = name
        elif kind == "export_statement" and not anonymous_default:
            anonymous_default = _is_anonymous_default_export(node)

    found = declared or assigned
    if found is None:
        if anonymous_default and is_pascal_case(base_name):
            return base_name
        return None
    if found != base_name and is_pascal_case(base_name):
        return f"{found} ({base_name})"
    return found


def _identifier_text(tree: SyntaxTree, node: Optional[Node]) -> Optional[str]:
    if node is None or node.type != "identifier":
        return None
    return tree.text(node)


def _is_anonymous_default_export(node: Node) -> bool:
    if not any(child.type == "default" for child in node.children):
        return False
    value = node.child_by_field_name("value")
    if value is not None and value.type in _FUNCTION_VALUES:
        return True
    declaration = node.child_by_field_name("declaration")
    return (
        declaration is not None
        and declaration.type == "function_declaration"
        and declaration.child_by_field_name("name") is None
    )


__all__ = ["file_base_name", "is_pascal_case", "resolve_component_name"]
