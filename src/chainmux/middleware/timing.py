"""Request timing middleware."""

from typing import Optional

import structlog
from starlette.requests import Request

from chainmux.chain import Handler, Middleware
from chainmux.context import Context
from chainmux.logging import log_duration
from chainmux.middleware.logger_binding import request_uri
from chainmux.response import ResponseWriter

logger = structlog.get_logger()


class TimingMiddleware(Middleware):
    """Log method, request URI and elapsed time around the inner handler.

    Emits ``request_timed`` on return and ``request_timed_failed`` when an
    exception passes through (so it only sees failures when placed outside
    :class:`~chainmux.middleware.RecoveryMiddleware`). The request and
    response are left untouched.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None) -> None:
        self._logger = logger

    def wrap(self, next_handler: Handler) -> Handler:
        async def timed(ctx: Context, writer: ResponseWriter, request: Request) -> None:
            with log_duration(
                self._logger if self._logger is not None else logger,
                "request_timed",
                method=request.method,
                url=request_uri(request),
            ):
                await next_handler(ctx, writer, request)

        return timed
