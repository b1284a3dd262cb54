"""Per-file component analysis pipeline."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..logging import get_logger
from ..models import ComponentInfo
from .extractor import StructuralExtractor
from .identity import resolve_component_name
from .parser import SyntaxTree, parse_file, parse_source
from .props import PropsBridge, PropsProvider


class ComponentAnalyzer:
    """Parses a file, resolves its component name and gathers its facts.

    Parse and read failures propagate as :class:`~reactscope.errors.ReactScopeError`
    subclasses so the caller decides how to report them; files that define no
    component return ``None``.
    """

    cache_version = "1"

    def __init__(
        self,
        root: str | Path,
        *,
        extractor: StructuralExtractor | None = None,
        props_provider: PropsProvider | None = None,
    ) -> None:
        self.root = Path(root).expanduser().resolve()
        self.extractor = extractor or StructuralExtractor()
        self.props_bridge = PropsBridge(props_provider)
        self.logger = get_logger("component")

    @property
    def signature(self) -> str:
        """Identify the settings that influence analysis output."""
        provider = self.props_bridge.provider
        provider_name = type(provider).__name__ if provider is not None else "none"
        return (
            f"v{self.cache_version};dedupe={int(self.extractor.dedupe_hooks)};"
            f"props={provider_name}"
        )

    def analyze_file(self, path: str | Path) -> Optional[ComponentInfo]:
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = self.root / file_path
        tree = parse_file(file_path)
        return self.analyze_tree(file_path, tree)

    def analyze_source(self, text: str, path: str | Path) -> Optional[ComponentInfo]:
        """Analyze in-memory ``text`` as if it were the contents of ``path``."""
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = self.root / file_path
        tree = parse_source(text, str(file_path))
        return self.analyze_tree(file_path, tree)

    def analyze_tree(self, path: Path, tree: SyntaxTree) -> Optional[ComponentInfo]:
        name = resolve_component_name(str(path), tree)
        if name is None:
            self.logger.debug("No component found in %s", path)
            return None

        extraction = self.extractor.extract(tree)
        component = ComponentInfo(
            name=name,
            file_path=self.relative_path(path),
            hooks=extraction.hooks,
            states=extraction.states,
            contexts=extraction.contexts,
            store_usage=extraction.store_usage,
        )
        self.props_bridge.apply(component, path)
        return component

    def relative_path(self, path: Path) -> str:
        return Path(os.path.relpath(path, self.root)).as_posix()


__all__ = ["ComponentAnalyzer"]
