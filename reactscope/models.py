"""Core data models shared across reactscope components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

STORE_TYPES = ("redux", "mobx", "recoil", "zustand", "jotai", "other")


@dataclass(frozen=True)
class Location:
    """Source position of a call: 1-based line, 0-based column."""

    line: int = 0
    column: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Location":
        return cls(line=int(payload.get("line", 0)), column=int(payload.get("column", 0)))


@dataclass
class HookInfo:
    """A hook call recorded for a component."""

    name: str
    call_location: Location
    dependencies: Optional[List[str]] = None
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "callLocation": self.call_location.to_dict()}
        if self.dependencies is not None:
            data["dependencies"] = list(self.dependencies)
        if self.value is not None:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "HookInfo":
        deps = payload.get("dependencies")
        return cls(
            name=str(payload["name"]),
            call_location=Location.from_dict(payload.get("callLocation") or {}),
            dependencies=[str(dep) for dep in deps] if isinstance(deps, list) else None,
            value=payload.get("value"),
        )


@dataclass
class StateInfo:
    """A ``useState`` declaration destructured into value and setter."""

    name: str
    setter: str
    initial_value: Optional[str] = None
    usage_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "setter": self.setter}
        if self.initial_value is not None:
            data["initialValue"] = self.initial_value
        if self.usage_count is not None:
            data["usageCount"] = self.usage_count
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StateInfo":
        return cls(
            name=str(payload["name"]),
            setter=str(payload["setter"]),
            initial_value=payload.get("initialValue"),
            usage_count=payload.get("usageCount"),
        )


@dataclass
class ContextInfo:
    """A context consumed through ``useContext``."""

    name: str
    usage_locations: List[Location] = field(default_factory=list)
    type: Optional[str] = None
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "usageLocations": [location.to_dict() for location in self.usage_locations],
        }
        if self.type is not None:
            data["type"] = self.type
        if self.value is not None:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ContextInfo":
        return cls(
            name=str(payload["name"]),
            usage_locations=[Location.from_dict(item) for item in payload.get("usageLocations") or []],
            type=payload.get("type"),
            value=payload.get("value"),
        )


@dataclass
class PropInfo:
    """A declared prop reported by the props provider."""

    name: str
    type: str = "unknown"
    required: bool = False
    default_value: Optional[str] = None
    description: Optional[str] = None
    usage_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type, "required": self.required}
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.description is not None:
            data["description"] = self.description
        if self.usage_count is not None:
            data["usageCount"] = self.usage_count
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PropInfo":
        return cls(
            name=str(payload["name"]),
            type=str(payload.get("type") or "unknown"),
            required=bool(payload.get("required", False)),
            default_value=payload.get("defaultValue"),
            description=payload.get("description"),
            usage_count=payload.get("usageCount"),
        )


@dataclass
class StoreInfo:
    """Aggregated usage of one external state-management library."""

    type: str
    actions: List[str] = field(default_factory=list)
    selectors: List[str] = field(default_factory=list)

    def add(self, bucket: str, entry: str) -> None:
        items = self.actions if bucket == "actions" else self.selectors
        if entry not in items:
            items.append(entry)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "actions": list(self.actions), "selectors": list(self.selectors)}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StoreInfo":
        return cls(
            type=str(payload["type"]),
            actions=[str(item) for item in payload.get("actions") or []],
            selectors=[str(item) for item in payload.get("selectors") or []],
        )


@dataclass
class ComponentInfo:
    """Facts gathered for a single component file."""

    name: str
    file_path: str
    hooks: List[HookInfo] = field(default_factory=list)
    states: List[StateInfo] = field(default_factory=list)
    contexts: List[ContextInfo] = field(default_factory=list)
    props: List[PropInfo] = field(default_factory=list)
    store_usage: List[StoreInfo] = field(default_factory=list)
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "filePath": self.file_path,
            "hooks": [hook.to_dict() for hook in self.hooks],
            "states": [state.to_dict() for state in self.states],
            "contexts": [context.to_dict() for context in self.contexts],
            "props": [prop.to_dict() for prop in self.props],
            "storeUsage": [store.to_dict() for store in self.store_usage],
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ComponentInfo":
        return cls(
            name=str(payload["name"]),
            file_path=str(payload["filePath"]),
            hooks=[HookInfo.from_dict(item) for item in payload.get("hooks") or []],
            states=[StateInfo.from_dict(item) for item in payload.get("states") or []],
            contexts=[ContextInfo.from_dict(item) for item in payload.get("contexts") or []],
            props=[PropInfo.from_dict(item) for item in payload.get("props") or []],
            store_usage=[StoreInfo.from_dict(item) for item in payload.get("storeUsage") or []],
            description=payload.get("description"),
        )


@dataclass
class SkippedFile:
    """A file excluded from results because it could not be analyzed."""

    path: str
    reason: str


@dataclass
class AnalysisReport:
    """Outcome of analyzing a batch of files."""

    root: str
    components: List[ComponentInfo] = field(default_factory=list)
    skipped: List[SkippedFile] = field(default_factory=list)
    cancelled: bool = False
