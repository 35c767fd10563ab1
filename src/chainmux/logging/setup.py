"""Structlog configuration for chainmux.

structlog events and records from plain stdlib loggers (uvicorn, asyncio)
go through one :class:`structlog.stdlib.ProcessorFormatter`, so both come
out of the same sink in the same format.
"""

import logging
import sys
from typing import IO, Optional

import structlog

from chainmux.config import ServerSettings

_CALLSITE = {
    structlog.processors.CallsiteParameter.FILENAME,
    structlog.processors.CallsiteParameter.FUNC_NAME,
    structlog.processors.CallsiteParameter.LINENO,
}


def _enrichers() -> list[structlog.types.Processor]:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(_CALLSITE),
    ]


def _renderer(log_format: str, stream: IO[str]) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    isatty = getattr(stream, "isatty", None)
    return structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))


def build_formatter(log_format: str, stream: IO[str]) -> structlog.stdlib.ProcessorFormatter:
    """Return the formatter that renders every record as ``console`` or ``json``."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_enrichers(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_format, stream),
        ],
    )


def setup_logging(
    log_level: str = "INFO", log_format: str = "console", stream: Optional[IO[str]] = None
) -> None:
    """Route all logging to a single handler on ``stream`` (stderr by default).

    ``log_level`` is the process-wide minimum severity; structlog events
    below it are dropped before any processing. Calling this again replaces
    the root handler, so the last call wins.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    stream = stream if stream is not None else sys.stderr

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_enrichers(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    sink = logging.StreamHandler(stream)
    sink.setFormatter(build_formatter(log_format, stream))
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(sink)
    root.setLevel(level)


def get_logger(*args: object, **initial_bindings: object) -> structlog.stdlib.BoundLogger:
    """Return a structlog bound logger."""
    return structlog.get_logger(*args, **initial_bindings)


def create_base_logger(settings: ServerSettings) -> structlog.stdlib.BoundLogger:
    """Return the process-wide base logger carrying the static ``role`` and ``host`` fields.

    Build it once at startup, after :func:`setup_logging`, and hand it to
    :class:`~chainmux.middleware.LoggerBindingMiddleware`. Request loggers are
    derived from it with ``bind`` and never rebind these fields.
    """
    return get_logger("chainmux").bind(role=settings.role, host=settings.hostname)
