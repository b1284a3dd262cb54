"""Pure helpers that render binding patterns and literals as display text.

Only a small closed set of node shapes is understood: identifiers, array
patterns and object patterns on the binding side, and plain literals on the
value side. Anything else renders as ``None`` so callers can skip the fact.
"""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from .parser import SyntaxTree

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "`": "`",
}


def call_arguments(call: Node) -> List[Node]:
    """Return the argument expressions of a call, ignoring comments."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return []
    return [child for child in arguments.named_children if child.type != "comment"]


def binding_target(call: Node) -> Optional[Node]:
    """Return the declarator pattern a call result is bound to, if any.

    Only direct initialisers count: ``const x = useThing()`` binds ``x`` but
    ``const x = await useThing()`` binds nothing.
    """
    parent = call.parent
    if parent is None or parent.type != "variable_declarator":
        return None
    value = parent.child_by_field_name("value")
    if value is None or value != call:
        return None
    return parent.child_by_field_name("name")


def sequence_elements(node: Node) -> List[Optional[Node]]:
    """Return the positional elements of an array literal or array pattern.

    Holes (``[, b]``) are kept as ``None`` so positions stay meaningful.
    """
    elements: List[Optional[Node]] = [None]
    for child in node.children:
        if child.type in ("[", "]", "comment"):
            continue
        if child.type == ",":
            elements.append(None)
        else:
            elements[-1] = child
    # A trailing comma does not introduce an element.
    if elements[-1] is None:
        elements.pop()
    return elements


def object_pattern_keys(tree: SyntaxTree, pattern: Node) -> List[str]:
    """Return the plain identifier keys of an object destructuring pattern."""
    keys: List[str] = []
    for child in pattern.named_children:
        key: Optional[Node] = None
        if child.type == "shorthand_property_identifier_pattern":
            key = child
        elif child.type == "pair_pattern":
            key = child.child_by_field_name("key")
            if key is not None and key.type != "property_identifier":
                key = None
        elif child.type == "object_assignment_pattern":
            key = child.child_by_field_name("left")
            if key is not None and key.type != "shorthand_property_identifier_pattern":
                key = None
        if key is not None:
            keys.append(tree.text(key))
    return keys


def render_keys(keys: List[str]) -> str:
    return "{ " + ", ".join(keys) + " }"


def render_binding(tree: SyntaxTree, pattern: Optional[Node]) -> Optional[str]:
    """Render an identifier, array pattern or object pattern as text."""
    if pattern is None:
        return None
    if pattern.type == "identifier":
        return tree.text(pattern)
    if pattern.type == "array_pattern":
        names = [
            tree.text(element)
            for element in sequence_elements(pattern)
            if element is not None and element.type == "identifier"
        ]
        return f"[{', '.join(names)}]" if names else None
    if pattern.type == "object_pattern":
        keys = object_pattern_keys(tree, pattern)
        return render_keys(keys) if keys else None
    return None


def render_literal(tree: SyntaxTree, node: Node) -> Optional[str]:
    """Render a literal initial value; non-literal expressions give ``None``."""
    kind = node.type
    if kind == "string":
        return f'"{string_value(tree, node)}"'
    if kind == "number":
        return _number_text(tree.text(node))
    if kind in ("true", "false", "null"):
        return kind
    if kind == "array":
        return "[]"
    if kind == "object":
        return "{}"
    return None


def string_value(tree: SyntaxTree, node: Node) -> str:
    """Decode the contents of a string literal node."""
    parts: List[str] = []
    for child in node.named_children:
        raw = tree.text(child)
        if child.type == "escape_sequence":
            parts.append(_decode_escape(raw))
        else:
            parts.append(raw)
    return "".join(parts)


def _decode_escape(raw: str) -> str:
    body = raw[1:]
    if body in _ESCAPES:
        return _ESCAPES[body]
    if body[:1] in ("x", "u"):
        digits = body[1:].strip("{}")
        try:
            return chr(int(digits, 16))
        except ValueError:
            return raw
    if body.startswith(("\r", "\n")):
        # Line continuation.
        return ""
    return body


def _number_text(raw: str) -> str:
    cleaned = raw.replace("_", "")
    try:
        return str(int(cleaned, 0))
    except ValueError:
        pass
    try:
        value = float(cleaned)
    except ValueError:
        return raw
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


__all__ = [
    "binding_target",
    "call_arguments",
    "object_pattern_keys",
    "render_binding",
    "render_keys",
    "render_literal",
    "sequence_elements",
    "string_value",
]
