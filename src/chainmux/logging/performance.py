"""Duration logging."""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import structlog


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)


@contextmanager
def log_duration(
    logger: structlog.stdlib.BoundLogger, event: str, **fields: Any
) -> Generator[None, None, None]:
    """Log ``event`` with ``duration_ms`` once the wrapped block finishes.

    If the block raises, ``<event>_failed`` is logged at error level with the
    exception attached and the exception propagates unchanged.
    """
    start = time.perf_counter()
    try:
        yield
    except Exception:
        logger.error(f"{event}_failed", duration_ms=_elapsed_ms(start), exc_info=True, **fields)
        raise
    logger.info(event, duration_ms=_elapsed_ms(start), **fields)
