"""Helper utilities for constructing temporary front-end projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from reactscope.discovery import ComponentScanner


class ProjectBuilder:
    """Utility for writing source files into a throwaway project and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self._scanner = ComponentScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def scan(self) -> List[Path]:
        """Return the candidate component files currently in the project."""
        return self._scanner.scan(self.root)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder"]
