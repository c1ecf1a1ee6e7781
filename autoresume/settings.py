from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()  # load .env early


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, "").strip() or default)
    except Exception:
        return default


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "yes", "on", "y", "t"}


@dataclass
class _Settings:
    # Storage
    home_override: str = field(default_factory=lambda: os.getenv("AUTORESUME_HOME", "").strip())

    # Generation
    generation_timeout: float = field(
        default_factory=lambda: _env_float("GENERATION_TIMEOUT", 120.0)
    )
    generation_temperature: float = field(
        default_factory=lambda: _env_float("GENERATION_TEMPERATURE", 0.1)
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_json: bool = field(default_factory=lambda: _env_bool("LOG_JSON", False))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", "").strip())

    def data_dir(self) -> Path:
        """Application-data directory; resolved lazily so a missing HOME fails at startup, not import."""
        if self.home_override:
            return Path(self.home_override).expanduser()
        # Path.home() raises RuntimeError when the home directory cannot be resolved
        return Path.home() / ".local" / "share" / "auto-resume"

    def log_path(self) -> Path:
        if self.log_file:
            return Path(self.log_file).expanduser()
        return self.data_dir() / "autoresume.log"


SETTINGS = _Settings()
