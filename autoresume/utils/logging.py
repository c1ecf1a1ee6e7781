from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Optional

API_KEY_RE = re.compile(r"\b(sk-[A-Za-z0-9_-]{4})[A-Za-z0-9_-]+")
KEY_ASSIGN_RE = re.compile(r"(api_key\s*[=:]\s*['\"]?)([^'\"\s,}]+)", re.IGNORECASE)

def _mask(text: str) -> str:
    text = API_KEY_RE.sub(r"\1***", text)
    return KEY_ASSIGN_RE.sub(r"\1***", text)

class SecretMask(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # mask the formatted text; masking the template alone would break %-args
        record.msg = _mask(record.getMessage())
        record.args = ()
        return True

def setup_logger(
    level: str = "INFO",
    json_mode: bool = False,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # clear handlers
    for old in list(logger.handlers):
        logger.removeHandler(old)

    # the terminal belongs to the UI, so log to a file when one is given
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        h: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        h = logging.NullHandler()
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    if json_mode:
        fmt = '{"ts":"%(asctime)s","lvl":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}'
    f = logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")
    h.setFormatter(f)
    h.addFilter(SecretMask())
    logger.addHandler(h)

    for noisy in ("httpx", "httpcore", "openai", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return logger
