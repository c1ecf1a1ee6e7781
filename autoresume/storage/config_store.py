# autoresume/storage/config_store.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from autoresume.errors import (
    AutoResumeError,
    DuplicateNameError,
    EmptyNameError,
    InvalidNameError,
)
from autoresume.storage.codec import marshal, unmarshal
from autoresume.storage.models import GlobalConfig, ModelCredential, Project, ProjectConfig
from autoresume.storage.project_store import ProjectStore
from autoresume.utils.dates import utc_now
from autoresume.utils.files import ensure_dir, read_bytes, write_bytes

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.toml"
PROJECTS_DIR = "projects"


class ConfigStore:
    """
    Global configuration: the project list and the model credentials.

    Every mutation re-reads config.toml, applies the change and writes the
    whole file back, so edits made outside the app survive. The in-memory
    copy is only replaced once the write succeeded.
    """

    def __init__(self, base_dir: Path, project_store: Optional[ProjectStore] = None):
        self.base_dir = Path(base_dir)
        self.config_path = self.base_dir / CONFIG_FILE
        self.projects_dir = self.base_dir / PROJECTS_DIR
        self.project_store = project_store or ProjectStore()
        self.config = GlobalConfig()

    @property
    def projects(self) -> List[Project]:
        return self.config.projects

    def load(self) -> GlobalConfig:
        ensure_dir(self.base_dir)
        if not self.config_path.exists():
            logger.info("No config at %s, writing defaults", self.config_path)
            self._write(GlobalConfig())
        self.config = self._read()
        logger.info(
            "Loaded config: %d projects, %d models",
            len(self.config.projects),
            len(self.config.models),
        )
        return self.config

    def add_project(self, name: str) -> Project:
        if not name:
            raise EmptyNameError("project")
        if name in {".", ".."} or "/" in name or "\\" in name:
            raise InvalidNameError(name)

        current = self._read()
        if any(p.name == name for p in current.projects):
            raise DuplicateNameError(name)

        project_dir = ensure_dir(ensure_dir(self.projects_dir) / name)
        now = utc_now()
        project = Project(name=name, path=project_dir, created_at=now, last_opened=now)
        self.project_store.save(project_dir, ProjectConfig(name=name))

        current.projects.append(project)
        self._write(current)
        self.config = current
        logger.info("Created project %r at %s", name, project_dir)
        return project

    def touch_project(self, name: str) -> Optional[Project]:
        """Stamp last_opened on the named project; unknown names are ignored."""
        current = self._read()
        for p in current.projects:
            if p.name == name:
                p.last_opened = utc_now()
                self._write(current)
                self.config = current
                return p
        return None

    def save_models(self, models: List[ModelCredential]) -> None:
        # uniqueness is the caller's job
        current = self._read()
        current.models = list(models)
        self._write(current)
        self.config = current
        logger.info("Saved %d model credentials", len(current.models))

    def get_models(self) -> List[ModelCredential]:
        """Fresh read of the credentials; unreadable config means 'none configured'."""
        try:
            return self._read().models
        except AutoResumeError as e:
            logger.debug("get_models: treating unreadable config as empty (%s)", e)
            return []

    def _read(self) -> GlobalConfig:
        return GlobalConfig.from_record(unmarshal(read_bytes(self.config_path)))

    def _write(self, config: GlobalConfig) -> None:
        write_bytes(self.config_path, marshal(config.to_record()))
