from __future__ import annotations

import logging
from pathlib import Path

from autoresume.errors import EmptyNameError
from autoresume.storage.codec import marshal, unmarshal
from autoresume.storage.models import Output, ProjectConfig
from autoresume.utils.files import read_bytes, write_bytes, write_text

logger = logging.getLogger(__name__)

PROJECT_FILE = "project.toml"
# the artifact holds plain generated text; only the suffix says PDF
ARTIFACT_SUFFIX = ".pdf"


class ProjectStore:
    """Per-project configuration stored at <project dir>/project.toml."""

    def config_path(self, project_path: Path) -> Path:
        return Path(project_path) / PROJECT_FILE

    def load(self, project_path: Path) -> ProjectConfig:
        """Raises PersistenceError when the file is missing or malformed."""
        data = read_bytes(self.config_path(project_path))
        return ProjectConfig.from_record(unmarshal(data))

    def save(self, project_path: Path, config: ProjectConfig) -> None:
        write_bytes(self.config_path(project_path), marshal(config.to_record()))
        logger.info("Saved project config %s (%d outputs)", project_path, len(config.outputs))

    def export_output(self, project_path: Path, output: Output) -> Path:
        """Write the output's generated text to <project dir>/<output name>.pdf."""
        if not output.name.strip():
            raise EmptyNameError("output")
        target = Path(project_path) / f"{output.name}{ARTIFACT_SUFFIX}"
        write_text(target, output.generated_text)
        logger.info("Exported output %r to %s", output.name, target)
        return target
