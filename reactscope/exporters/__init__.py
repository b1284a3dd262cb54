"""Render component analysis results as JSON, Markdown or HTML."""

from __future__ import annotations

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models import ComponentInfo

EXPORT_FORMATS: Dict[str, str] = {
    "json": "json",
    "markdown": "md",
    "html": "html",
}

_TEMPLATES = {
    "markdown": "components.md.j2",
    "html": "components.html.j2",
}

_STORE_LABELS = {
    "redux": "Redux",
    "mobx": "MobX",
    "recoil": "Recoil",
    "zustand": "Zustand",
    "jotai": "Jotai",
}

_env: Environment | None = None


def _anchor(name: str) -> str:
    return re.sub(r"[^\w-]+", "", name.lower())


def _store_label(store_type: str) -> str:
    return _STORE_LABELS.get(store_type, "Other")


def _get_env() -> Environment:
    global _env
    if _env is None:
        env = Environment(
            loader=FileSystemLoader(str(Path(__file__).with_name("templates"))),
            autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters["anchor"] = _anchor
        env.filters["store_label"] = _store_label
        _env = env
    return _env


def export_components(
    components: Sequence[ComponentInfo],
    fmt: str,
    *,
    generated_at: datetime | None = None,
) -> str:
    """Return ``components`` rendered in ``fmt`` (``json``, ``markdown`` or ``html``)."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    if fmt == "json":
        return json.dumps([component.to_dict() for component in components], indent=2, ensure_ascii=False) + "\n"
    timestamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    template = _get_env().get_template(_TEMPLATES[fmt])
    return template.render(components=list(components), generated_at=timestamp)


def write_export(
    components: Sequence[ComponentInfo],
    fmt: str,
    destination: Path,
    *,
    generated_at: datetime | None = None,
) -> Path:
    """Write an export to ``destination``, naming the file when it is a directory."""
    moment = generated_at or datetime.now()
    content = export_components(components, fmt, generated_at=moment)
    target = destination
    if destination.is_dir():
        stamp = moment.strftime("%Y-%m-%d_%H-%M-%S")
        target = destination / f"react-components-{stamp}.{EXPORT_FORMATS[fmt]}"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


__all__ = ["EXPORT_FORMATS", "export_components", "write_export"]
