"""Persistent cache for per-file component analysis results."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Iterable, Optional

from ..models import ComponentInfo

_CACHE_VERSION = 1

CACHE_DIRNAME = ".reactscope"
CACHE_FILENAME = "component_cache.json"


@dataclass(frozen=True)
class CachedResult:
    """A cache hit; ``component`` is ``None`` for files that define no component."""

    component: Optional[ComponentInfo]


class ComponentCache:
    """Stores analysis results keyed by relative path, analyzer signature and file hash."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, object]] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    @classmethod
    def for_root(cls, root: Path) -> "ComponentCache":
        return cls(root / CACHE_DIRNAME / CACHE_FILENAME)

    def get(self, key: str, *, signature: str, fingerprint: str) -> Optional[CachedResult]:
        entry = self._entries.get(key)
        if not entry:
            return None
        if entry.get("signature") != signature:
            return None
        if entry.get("fingerprint") != fingerprint:
            return None
        payload = entry.get("component")
        if payload is None:
            return CachedResult(component=None)
        if not isinstance(payload, dict):
            return None
        try:
            return CachedResult(component=ComponentInfo.from_dict(payload))
        except (KeyError, TypeError, ValueError):
            return None

    def store(
        self,
        key: str,
        *,
        signature: str,
        fingerprint: str,
        component: Optional[ComponentInfo],
    ) -> None:
        self._entries[key] = {
            "signature": signature,
            "fingerprint": fingerprint,
            "component": component.to_dict() if component is not None else None,
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._dirty = True

    def prune(self, keys_to_keep: Iterable[str]) -> None:
        keep = set(keys_to_keep)
        removed = [key for key in self._entries if key not in keep]
        if removed:
            for key in removed:
                self._entries.pop(key, None)
            self._dirty = True

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {
            "version": _CACHE_VERSION,
            "entries": self._entries,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )
        self._dirty = False

    def clear(self) -> None:
        self._entries.clear()
        self._dirty = True

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        valid_entries: Dict[str, Dict[str, object]] = {}
        for key, raw in entries.items():
            if not isinstance(key, str) or not isinstance(raw, dict):
                continue
            if "signature" not in raw or "fingerprint" not in raw or "component" not in raw:
                continue
            valid_entries[key] = raw
        self._entries = valid_entries
        self._dirty = False


__all__ = ["CachedResult", "ComponentCache"]
