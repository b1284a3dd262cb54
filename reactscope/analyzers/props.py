"""Bridge to an external, type-aware prop documentation tool."""

from __future__ import annotations

import json
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..config import DEFAULT_PROPS_COMMAND
from ..errors import PropsError
from ..logging import get_logger, log_exception
from ..models import ComponentInfo, PropInfo

Runner = Callable[[Sequence[str], float], str]

SUPPORTED_SUFFIXES = {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"}


@dataclass
class PropsResult:
    """Props and top-level description reported for a component file."""

    props: List[PropInfo] = field(default_factory=list)
    description: Optional[str] = None


class PropsProvider(ABC):
    """Contract for collaborators that document a component's props."""

    @property
    def available(self) -> bool:
        """False once the provider knows it cannot run at all."""
        return True

    @abstractmethod
    def fetch(self, path: Path) -> PropsResult:
        """Return prop documentation for ``path`` or raise :class:`PropsError`."""


def _default_runner(args: Sequence[str], timeout: float) -> str:
    completed = subprocess.run(
        list(args),
        capture_output=True,
        text=True,
        timeout=timeout,
        check=True,
    )
    return completed.stdout


class ReactDocgenProvider(PropsProvider):
    """Runs the ``react-docgen`` CLI and reads its JSON output."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_PROPS_COMMAND,
        *,
        timeout: float = 30.0,
        runner: Runner | None = None,
    ) -> None:
        self.command = list(command)
        self.timeout = timeout
        self._runner = runner or _default_runner
        self._available = True
        self.logger = get_logger("props")

    @property
    def available(self) -> bool:
        return self._available

    def fetch(self, path: Path) -> PropsResult:
        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise PropsError(f"Unsupported file type for prop extraction: {path.name}")
        args = [*self.command, str(path)]
        try:
            output = self._runner(args, self.timeout)
        except FileNotFoundError as exc:
            self._available = False
            self.logger.warning(
                "Prop extraction disabled: %s not found (%s)", self.command[0], exc
            )
            raise PropsError(f"{self.command[0]} is not installed") from exc
        except subprocess.TimeoutExpired as exc:
            raise PropsError(f"react-docgen timed out after {self.timeout:g}s") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise PropsError(f"react-docgen failed: {detail}") from exc
        return parse_docgen_output(output)


def parse_docgen_output(output: str) -> PropsResult:
    """Convert react-docgen JSON into a :class:`PropsResult`.

    Accepts the single-document shape, a list of documents, and the
    ``{path: [documents]}`` map printed by newer releases. Only the first
    documented component is used.
    """
    if not output.strip():
        return PropsResult()
    try:
        payload = json.loads(output)
    except json.JSONDecodeError as exc:
        raise PropsError(f"react-docgen produced invalid JSON: {exc}") from exc

    document = _first_document(payload)
    if document is None:
        return PropsResult()

    props: List[PropInfo] = []
    raw_props = document.get("props")
    if isinstance(raw_props, dict):
        for name, raw in raw_props.items():
            if isinstance(raw, dict):
                props.append(_prop_from_doc(str(name), raw))

    description = document.get("description")
    if not isinstance(description, str) or not description.strip():
        description = None
    return PropsResult(props=props, description=description)


def _first_document(payload: Any) -> Optional[Dict[str, Any]]:
    if isinstance(payload, list):
        for item in payload:
            document = _first_document(item)
            if document is not None:
                return document
        return None
    if not isinstance(payload, dict):
        return None
    if "props" in payload or "displayName" in payload or "description" in payload:
        return payload
    for value in payload.values():
        document = _first_document(value)
        if document is not None:
            return document
    return None


def _prop_from_doc(name: str, raw: Dict[str, Any]) -> PropInfo:
    type_name = "unknown"
    for key in ("tsType", "flowType", "type"):
        type_info = raw.get(key)
        if isinstance(type_info, dict):
            label = type_info.get("raw") or type_info.get("name")
            if isinstance(label, str) and label:
                type_name = label
                break

    default_value = None
    default_info = raw.get("defaultValue")
    if isinstance(default_info, dict) and default_info.get("value") is not None:
        default_value = str(default_info["value"])

    description = raw.get("description")
    return PropInfo(
        name=name,
        type=type_name,
        required=bool(raw.get("required", False)),
        default_value=default_value,
        description=description if isinstance(description, str) and description else None,
    )


class PropsBridge:
    """Merges provider output into a component, never failing the analysis."""

    def __init__(self, provider: PropsProvider | None) -> None:
        self.provider = provider
        self.logger = get_logger("props")

    def apply(self, component: ComponentInfo, path: Path) -> None:
        provider = self.provider
        if provider is None or not provider.available:
            return
        try:
            result = provider.fetch(path)
        except Exception as exc:  # provider failures never abort the file
            log_exception(self.logger, f"Failed to analyze props for {component.name}", exc)
            return
        component.props.extend(result.props)
        if result.description:
            component.description = result.description


__all__ = [
    "PropsBridge",
    "PropsProvider",
    "PropsResult",
    "ReactDocgenProvider",
    "parse_docgen_output",
]
