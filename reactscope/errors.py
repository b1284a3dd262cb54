"""Exception types raised by reactscope."""

from __future__ import annotations


class ReactScopeError(RuntimeError):
    """Base class for reactscope failures."""


class ConfigError(ReactScopeError):
    """Raised when the configuration file cannot be parsed."""


class SourceReadError(ReactScopeError):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class ParseError(ReactScopeError):
    """Raised when a source file does not parse cleanly."""

    def __init__(self, path: str, line: int, column: int, detail: str = "syntax error") -> None:
        super().__init__(f"{path}:{line}:{column}: {detail}")
        self.path = path
        self.line = line
        self.column = column


class PropsError(ReactScopeError):
    """Raised by props providers when prop documentation cannot be produced."""


__all__ = ["ConfigError", "ParseError", "PropsError", "ReactScopeError", "SourceReadError"]
