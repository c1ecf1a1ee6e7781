from __future__ import annotations
from datetime import datetime, timezone

OUTPUT_STAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"

def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)

def output_stamp(when: datetime | None = None) -> str:
    """Name for a generated output: local completion time, second precision."""
    return (when or datetime.now()).strftime(OUTPUT_STAMP_FORMAT)

def short_date(when: datetime) -> str:
    return when.strftime("%Y-%m-%d")
