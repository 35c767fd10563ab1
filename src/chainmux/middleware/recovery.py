"""Recovery middleware -- turns unexpected exceptions into a 500 response."""

from http import HTTPStatus
from typing import Optional

import structlog
from starlette.requests import Request

from chainmux.chain import Handler, Middleware
from chainmux.context import Context
from chainmux.response import ResponseWriter

logger = structlog.get_logger()


class RecoveryMiddleware(Middleware):
    """Catch any exception raised further down the chain.

    The exception is logged with its traceback and the client receives a
    generic ``500 Internal Server Error``. If the inner handler had already
    committed a status, nothing more is written, so every request still gets
    exactly one response. Place this first in a production chain.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None) -> None:
        self._logger = logger

    def wrap(self, next_handler: Handler) -> Handler:
        async def recover(ctx: Context, writer: ResponseWriter, request: Request) -> None:
            try:
                await next_handler(ctx, writer, request)
            except Exception:
                log = self._logger if self._logger is not None else logger
                log.error(
                    "request_panic_recovered",
                    method=request.method,
                    path=request.url.path,
                    exc_info=True,
                )
                if writer.committed:
                    log.warning(
                        "response_already_committed",
                        method=request.method,
                        path=request.url.path,
                        status_code=writer.status_code,
                    )
                    return
                writer.error(HTTPStatus.INTERNAL_SERVER_ERROR)

        return recover
