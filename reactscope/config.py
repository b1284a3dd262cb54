"""Configuration loading for reactscope (.reactscope.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".reactscope.yml"

DEFAULT_PROPS_COMMAND = ("npx", "--no", "react-docgen")


@dataclass
class AnalysisConfig:
    """Extraction policy and batch sizing."""

    dedupe_hooks: bool = True
    max_workers: int = 1


@dataclass
class PropsConfig:
    """Settings for the external prop documentation tool."""

    enabled: bool = True
    command: List[str] = field(default_factory=lambda: list(DEFAULT_PROPS_COMMAND))
    timeout: float = 30.0


@dataclass
class CacheConfig:
    """Persistent result cache settings."""

    enabled: bool = False


@dataclass
class ReactScopeConfig:
    """Represents the settings defined in .reactscope.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    props: PropsConfig = field(default_factory=PropsConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


def load_config(config_path: Path) -> ReactScopeConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ReactScopeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    dedupe = _as_bool(analysis_data.get("dedupe_hooks"))
    if dedupe is not None:
        analysis.dedupe_hooks = dedupe
    workers = _as_int(analysis_data.get("max_workers"))
    if workers is not None:
        if workers < 1:
            raise ConfigError("analysis.max_workers must be a positive integer")
        analysis.max_workers = workers

    props = PropsConfig()
    props_data = _as_dict(data.get("props"))
    enabled = _as_bool(props_data.get("enabled"))
    if enabled is not None:
        props.enabled = enabled
    command = props_data.get("command")
    if isinstance(command, str):
        props.command = command.split()
    elif command is not None:
        props.command = _as_str_list(command)
    if not props.command:
        raise ConfigError("props.command must not be empty")
    timeout = _as_float(props_data.get("timeout"))
    if timeout is not None:
        props.timeout = timeout

    cache = CacheConfig()
    cache_enabled = _as_bool(_as_dict(data.get("cache")).get("enabled"))
    if cache_enabled is not None:
        cache.enabled = cache_enabled

    return ReactScopeConfig(
        root=root,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        analysis=analysis,
        props=props,
        cache=cache,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "AnalysisConfig",
    "CacheConfig",
    "ConfigError",
    "PropsConfig",
    "ReactScopeConfig",
    "load_config",
]
