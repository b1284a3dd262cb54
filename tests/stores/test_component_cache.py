"""Tests for the component result cache."""

from __future__ import annotations

import json
from pathlib import Path

from reactscope.models import ComponentInfo, HookInfo, Location, StateInfo
from reactscope.stores import ComponentCache


def _component() -> ComponentInfo:
    return ComponentInfo(
        name="Counter",
        file_path="src/Counter.tsx",
        hooks=[HookInfo(name="useState", call_location=Location(4, 28), value="[count, setCount]")],
        states=[StateInfo(name="count", setter="setCount", initial_value="0", usage_count=2)],
    )


def test_cache_round_trip(tmp_path: Path) -> None:
    cache_path = tmp_path / "cache.json"
    cache = ComponentCache(cache_path)
    cache.store("src/Counter.tsx", signature="sig-1", fingerprint="fp-abc", component=_component())
    cache.persist()

    loaded = ComponentCache(cache_path)
    hit = loaded.get("src/Counter.tsx", signature="sig-1", fingerprint="fp-abc")

    assert hit is not None
    assert hit.component == _component()


def test_cache_invalidates_on_signature_or_content_change(tmp_path: Path) -> None:
    cache = ComponentCache(tmp_path / "cache.json")
    cache.store("a.tsx", signature="sig-1", fingerprint="fp", component=_component())

    assert cache.get("a.tsx", signature="sig-1", fingerprint="fp") is not None
    assert cache.get("a.tsx", signature="sig-2", fingerprint="fp") is None
    assert cache.get("a.tsx", signature="sig-1", fingerprint="fp-changed") is None
    assert cache.get("missing.tsx", signature="sig-1", fingerprint="fp") is None


def test_cache_remembers_files_without_components(tmp_path: Path) -> None:
    cache = ComponentCache(tmp_path / "cache.json")
    cache.store("utils.ts", signature="s", fingerprint="fp", component=None)

    hit = cache.get("utils.ts", signature="s", fingerprint="fp")

    assert hit is not None
    assert hit.component is None


def test_cache_prune_removes_unused(tmp_path: Path) -> None:
    cache = ComponentCache(tmp_path / "cache.json")
    cache.store("a.tsx", signature="s", fingerprint="fp", component=None)
    cache.store("b.tsx", signature="s", fingerprint="fp", component=None)

    cache.prune(["a.tsx"])
    cache.persist()

    reloaded = ComponentCache(tmp_path / "cache.json")
    assert len(reloaded) == 1
    assert reloaded.get("b.tsx", signature="s", fingerprint="fp") is None


def test_cache_ignores_corrupt_or_foreign_payloads(tmp_path: Path) -> None:
    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")
    foreign = tmp_path / "foreign.json"
    foreign.write_text(json.dumps({"version": 99, "entries": {"a.tsx": {}}}), encoding="utf-8")

    assert len(ComponentCache(corrupt)) == 0
    assert len(ComponentCache(foreign)) == 0


def test_for_root_uses_hidden_directory(tmp_path: Path) -> None:
    cache = ComponentCache.for_root(tmp_path)
    cache.store("a.tsx", signature="s", fingerprint="fp", component=None)
    cache.persist()

    assert (tmp_path / ".reactscope" / "component_cache.json").is_file()
