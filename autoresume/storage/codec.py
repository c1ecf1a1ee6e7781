from __future__ import annotations
import tomllib
from typing import Any, Dict

import tomli_w

from autoresume.errors import PersistenceError

def marshal(record: Dict[str, Any]) -> bytes:
    return tomli_w.dumps(record).encode("utf-8")

def unmarshal(data: bytes) -> Dict[str, Any]:
    try:
        return tomllib.loads(data.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise PersistenceError("failed to parse config file", cause=e) from e
