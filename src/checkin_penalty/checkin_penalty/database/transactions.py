from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from ..core.exceptions import TransientStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_transaction(
    attempt: Callable[[], T],
    *,
    max_attempts: int,
    backoff_seconds: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``attempt`` until it commits, retrying on ``TransientStoreError``.

    ``attempt`` must open its own transaction and re-read everything it writes,
    so a retry always works from fresh state. Any other exception propagates
    immediately. When every attempt conflicts the last error is re-raised.
    """

    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt_no in range(1, max_attempts + 1):
        try:
            return attempt()
        except TransientStoreError as exc:
            if attempt_no >= max_attempts:
                logger.error("db.transaction.exhausted attempts=%s error=%s", attempt_no, exc)
                raise
            logger.info("db.transaction.retry attempt=%s error=%s", attempt_no, exc)
            if backoff_seconds > 0:
                sleep(backoff_seconds * attempt_no)

    raise AssertionError("unreachable")
