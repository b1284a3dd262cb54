"""NX workspace project and dependency reader."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from ..logging import get_logger

_WORKSPACE_FILES = ("workspace.json", "angular.json")


@dataclass(frozen=True)
class ProjectInfo:
    """A project declared in the workspace configuration."""

    name: str
    root: str
    source_root: str
    project_type: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "root": self.root,
            "sourceRoot": self.source_root,
            "projectType": self.project_type,
        }


@dataclass(frozen=True)
class DependencyInfo:
    """A dependency from one workspace project to another."""

    source_project: str
    target_project: str

    def to_dict(self) -> Dict[str, str]:
        return {"sourceProject": self.source_project, "targetProject": self.target_project}


class WorkspaceAnalyzer:
    """Reads NX/Angular workspace files under ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser().resolve()
        self.logger = get_logger("workspace")

    def is_nx_workspace(self) -> bool:
        return (self.root / "nx.json").is_file()

    def get_projects(self) -> Dict[str, ProjectInfo]:
        config = self._load_workspace_config()
        projects = config.get("projects")
        if not isinstance(projects, dict):
            return {}

        result: Dict[str, ProjectInfo] = {}
        for name, entry in projects.items():
            # Newer workspace.json files map a project name straight to its root.
            if isinstance(entry, str):
                entry = {"root": entry}
            if not isinstance(entry, dict):
                continue
            root = str(entry.get("root") or "")
            result[str(name)] = ProjectInfo(
                name=str(name),
                root=root,
                source_root=str(entry.get("sourceRoot") or root),
                project_type=str(entry.get("projectType") or "application"),
            )
        return result

    def get_dependencies(self) -> List[DependencyInfo]:
        projects = self.get_projects()
        dependencies: List[DependencyInfo] = []
        for name, project in projects.items():
            package = _load_json(self.root / project.root / "package.json", self.logger)
            declared: Dict[str, Any] = {}
            for key in ("dependencies", "devDependencies"):
                section = package.get(key)
                if isinstance(section, dict):
                    declared.update(section)
            for dependency in declared:
                if dependency in projects:
                    dependencies.append(DependencyInfo(source_project=name, target_project=dependency))
        return dependencies

    def _load_workspace_config(self) -> Dict[str, Any]:
        for filename in _WORKSPACE_FILES:
            path = self.root / filename
            if path.is_file():
                return _load_json(path, self.logger)
        return {}


def _load_json(path: Path, logger: logging.Logger) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("Failed to read %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


__all__ = ["DependencyInfo", "ProjectInfo", "WorkspaceAnalyzer"]
