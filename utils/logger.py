"""Logging setup; no global state beyond the logging tree."""

from __future__ import annotations

import logging
import sys
from typing import Any

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Chatty third-party loggers kept at WARNING unless running at DEBUG
NOISY_LOGGERS = ("urllib3", "httpx", "multipart")


def setup_logging(
    level: str = "INFO",
    format_string: str | None = None,
    stream: Any = None,
) -> None:
    """
    Configure root logger once. Safe to call from main, the API factory or tests.
    """
    resolved = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format=format_string or DEFAULT_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=stream or sys.stdout,
        force=True,
    )
    if resolved > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def log_structured(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """Emit a log record with extra keys (trace_id, elapsed_sec, ...) for aggregation."""
    suffix = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.log(level, f"{msg} {suffix}" if suffix else msg, extra=kwargs)
