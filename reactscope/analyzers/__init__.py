"""Per-file component analysis engine."""

from __future__ import annotations

from .component import ComponentAnalyzer
from .extractor import Extraction, StructuralExtractor
from .identity import resolve_component_name
from .parser import SyntaxTree, parse_file, parse_source
from .props import PropsBridge, PropsProvider, PropsResult, ReactDocgenProvider
from .usage import count_usages
from .workspace import DependencyInfo, ProjectInfo, WorkspaceAnalyzer

__all__ = [
    "ComponentAnalyzer",
    "DependencyInfo",
    "Extraction",
    "ProjectInfo",
    "PropsBridge",
    "PropsProvider",
    "PropsResult",
    "ReactDocgenProvider",
    "StructuralExtractor",
    "SyntaxTree",
    "WorkspaceAnalyzer",
    "count_usages",
    "parse_file",
    "parse_source",
    "resolve_component_name",
]
