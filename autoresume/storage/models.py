# autoresume/storage/models.py
"""
Records persisted by the stores, with their TOML record shapes.

GlobalConfig  -> <data dir>/config.toml
ProjectConfig -> <project dir>/project.toml
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from autoresume.errors import PersistenceError


def _str(record: Dict[str, Any], key: str, where: str) -> str:
    value = record.get(key, "")
    if not isinstance(value, str):
        raise PersistenceError(f"{where}: '{key}' must be a string, got {type(value).__name__}")
    return value


def _datetime(record: Dict[str, Any], key: str, where: str) -> datetime:
    value = record.get(key)
    if not isinstance(value, datetime):
        raise PersistenceError(f"{where}: '{key}' must be a datetime")
    return value


def _tables(record: Dict[str, Any], key: str, where: str) -> List[Dict[str, Any]]:
    value = record.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise PersistenceError(f"{where}: '{key}' must be an array of tables")
    return value


@dataclass
class Project:
    name: str
    path: Path
    created_at: datetime
    last_opened: datetime

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "created_at": self.created_at,
            "last_opened": self.last_opened,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Project":
        return cls(
            name=_str(record, "name", "project"),
            path=Path(_str(record, "path", "project")),
            created_at=_datetime(record, "created_at", "project"),
            last_opened=_datetime(record, "last_opened", "project"),
        )


@dataclass
class ModelCredential:
    name: str = ""
    provider: str = ""
    model: str = ""
    api_key: str = ""

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "provider": self.provider,
            "model": self.model,
            "api_key": self.api_key,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ModelCredential":
        return cls(
            name=_str(record, "name", "model"),
            provider=_str(record, "provider", "model"),
            model=_str(record, "model", "model"),
            api_key=_str(record, "api_key", "model"),
        )


@dataclass
class GlobalConfig:
    projects: List[Project] = field(default_factory=list)
    models: List[ModelCredential] = field(default_factory=list)
    # kept for file compatibility; nothing reads it
    user_config_path: str = ""

    def to_record(self) -> Dict[str, Any]:
        return {
            "user_config_path": self.user_config_path,
            "projects": [p.to_record() for p in self.projects],
            "models": [m.to_record() for m in self.models],
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GlobalConfig":
        return cls(
            user_config_path=_str(record, "user_config_path", "config"),
            projects=[Project.from_record(r) for r in _tables(record, "projects", "config")],
            models=[ModelCredential.from_record(r) for r in _tables(record, "models", "config")],
        )


def find_model(models: List[ModelCredential], name: str) -> Optional[ModelCredential]:
    """Resolve a credential by name; stale or empty names resolve to None."""
    if not name:
        return None
    for m in models:
        if m.name == name:
            return m
    return None


@dataclass
class Output:
    name: str = ""
    job_description: str = ""
    generated_text: str = ""

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "job_description": self.job_description,
            "output": self.generated_text,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Output":
        return cls(
            name=_str(record, "name", "output"),
            job_description=_str(record, "job_description", "output"),
            generated_text=_str(record, "output", "output"),
        )


@dataclass
class ProjectConfig:
    name: str = ""
    selected_model: str = ""
    resume_input: str = ""
    outputs: List[Output] = field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "model": self.selected_model,
            "resume_input": self.resume_input,
            "outputs": [o.to_record() for o in self.outputs],
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ProjectConfig":
        return cls(
            name=_str(record, "name", "project config"),
            selected_model=_str(record, "model", "project config"),
            resume_input=_str(record, "resume_input", "project config"),
            outputs=[Output.from_record(r) for r in _tables(record, "outputs", "project config")],
        )
