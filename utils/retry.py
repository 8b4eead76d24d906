"""Retry with exponential backoff. No global state."""

from __future__ import annotations

import time
import logging
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)
T = TypeVar("T")


def with_retry(
    fn: Callable[[], T],
    max_attempts: int = 3,
    delay_sec: float = 2.0,
    backoff: bool = True,
    retry_exceptions: tuple[type[Exception], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Execute fn; on retry_exceptions retry with exponential backoff.
    Raises the last exception after max_attempts. Other exceptions propagate at once.
    """
    attempts = max(1, max_attempts)
    for attempt in range(attempts):
        try:
            return fn()
        except retry_exceptions as e:
            if attempt >= attempts - 1:
                raise
            wait = delay_sec * (2**attempt) if backoff else delay_sec
            logger.warning(
                "Retry attempt %s/%s after %.2fs: %s",
                attempt + 1,
                attempts,
                wait,
                e,
            )
            sleep(wait)
    raise RuntimeError("retry exhausted")
