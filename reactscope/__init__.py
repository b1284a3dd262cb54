"""Static analysis of React component source files."""

from .analyzers.component import ComponentAnalyzer
from .models import (
    AnalysisReport,
    ComponentInfo,
    ContextInfo,
    HookInfo,
    Location,
    PropInfo,
    SkippedFile,
    StateInfo,
    StoreInfo,
)
from .orchestrator import Orchestrator

__version__ = "0.1.0"

__all__ = [
    "AnalysisReport",
    "ComponentAnalyzer",
    "ComponentInfo",
    "ContextInfo",
    "HookInfo",
    "Location",
    "Orchestrator",
    "PropInfo",
    "SkippedFile",
    "StateInfo",
    "StoreInfo",
]
