from __future__ import annotations
from pathlib import Path

from autoresume.errors import PersistenceError

def read_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise PersistenceError("failed to read file", path=path, cause=e) from e

def write_bytes(path: Path, data: bytes) -> None:
    # full overwrite; no merge with what is on disk
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise PersistenceError("failed to write file", path=path, cause=e) from e

def write_text(path: Path, text: str) -> None:
    write_bytes(path, text.encode("utf-8"))

def ensure_dir(path: Path) -> Path:
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError("failed to create directory", path=path, cause=e) from e
    return Path(path)
