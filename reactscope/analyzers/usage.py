"""Count references to a variable within its enclosing scope."""

from __future__ import annotations

from tree_sitter import Node

from .parser import SyntaxTree, walk

SCOPE_TYPES = {
    "program",
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
}

_REFERENCE_TYPES = {"identifier", "shorthand_property_identifier"}

_JSX_TAG_OWNERS = {"jsx_opening_element", "jsx_closing_element", "jsx_self_closing_element"}

_JSX_TAG_PARTS = {"member_expression", "nested_identifier", "jsx_namespace_name"}

_PATTERN_TYPES = {
    "array_pattern",
    "object_pattern",
    "pair_pattern",
    "assignment_pattern",
    "object_assignment_pattern",
    "rest_pattern",
}


def enclosing_scope(node: Node) -> Node:
    """Return the nearest function (or the program) containing ``node``."""
    current = node.parent
    while current is not None:
        if current.type in SCOPE_TYPES:
            return current
        if current.parent is None:
            return current
        current = current.parent
    return node


def count_usages(tree: SyntaxTree, scope: Node, name: str) -> int:
    """Count references to ``name`` inside ``scope``, excluding its declaration."""
    count = 0
    for node in walk(scope):
        if node.type not in _REFERENCE_TYPES:
            continue
        if tree.text(node) != name:
            continue
        if is_declaration_site(node) or is_jsx_tag_name(node):
            continue
        count += 1
    return count


def is_declaration_site(node: Node) -> bool:
    """True when ``node`` is bound by the name side of a variable declarator."""
    child = node
    parent = node.parent
    while parent is not None and parent.type in _PATTERN_TYPES:
        if parent.type in ("assignment_pattern", "object_assignment_pattern"):
            if parent.child_by_field_name("left") != child:
                return False
        elif parent.type == "pair_pattern":
            if parent.child_by_field_name("value") != child:
                return False
        child, parent = parent, parent.parent
    if parent is None or parent.type != "variable_declarator":
        return False
    return parent.child_by_field_name("name") == child


def is_jsx_tag_name(node: Node) -> bool:
    """True when ``node`` is part of an element tag such as ``<label>`` or ``<Menu.Item>``."""
    child = node
    parent = node.parent
    while parent is not None and parent.type in _JSX_TAG_PARTS:
        child, parent = parent, parent.parent
    if parent is None or parent.type not in _JSX_TAG_OWNERS:
        return False
    return parent.child_by_field_name("name") == child


__all__ = ["SCOPE_TYPES", "count_usages", "enclosing_scope", "is_declaration_site", "is_jsx_tag_name"]
