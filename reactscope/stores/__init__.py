"""Persistent stores used by reactscope."""

from .component_cache import CachedResult, ComponentCache

__all__ = ["CachedResult", "ComponentCache"]
