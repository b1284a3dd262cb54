"""Tree-sitter parser adapter for component source files."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..errors import ParseError, SourceReadError
from ..models import Location

# The TSX grammar is a superset covering JSX, type annotations and decorators,
# so every file goes through it regardless of extension.
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

_local = threading.local()


@dataclass
class SyntaxTree:
    """A parsed source file together with the bytes it was parsed from."""

    path: str
    source: bytes
    root: Node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _get_parser() -> Parser:
    # tree-sitter parsers are not safe to share between threads.
    parser: Optional[Parser] = getattr(_local, "parser", None)
    if parser is None:
        parser = Parser(TSX_LANGUAGE)
        _local.parser = parser
    return parser


def read_source(path: Path) -> str:
    """Return the UTF-8 text of ``path`` or raise :class:`SourceReadError`."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SourceReadError(str(path), f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise SourceReadError(str(path), exc.strerror or str(exc)) from exc


def parse_source(text: str, path: str = "<memory>") -> SyntaxTree:
    """Parse ``text`` into a syntax tree, raising :class:`ParseError` on syntax errors."""
    source = text.encode("utf-8")
    tree = _get_parser().parse(source)
    root = tree.root_node
    if root.has_error:
        error = _first_error(root)
        location = position(error, source) if error is not None else Location()
        detail = "missing token" if error is not None and error.is_missing else "syntax error"
        raise ParseError(path, location.line, location.column, detail)
    return SyntaxTree(path=path, source=source, root=root)


def parse_file(path: Path) -> SyntaxTree:
    """Read and parse ``path``."""
    return parse_source(read_source(path), str(path))


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def position(node: Node, source: bytes) -> Location:
    """Return the 1-based line and 0-based character column where ``node`` starts."""
    # start_point counts bytes; columns count characters.
    line_start = source.rfind(b"\n", 0, node.start_byte) + 1
    column = len(source[line_start : node.start_byte].decode("utf-8", errors="replace"))
    return Location(line=node.start_point[0] + 1, column=column)


def _first_error(root: Node) -> Optional[Node]:
    for node in walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


__all__ = ["SyntaxTree", "parse_file", "parse_source", "position", "read_source", "walk"]
