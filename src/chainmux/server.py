"""ASGI transport adapter and uvicorn entry point."""

from typing import Any, Optional

import structlog
import uvicorn
from starlette.requests import Request
from starlette.types import Receive, Scope, Send

from chainmux.chain import Handler
from chainmux.config import ServerSettings
from chainmux.context import Context
from chainmux.response import ResponseWriter

logger = structlog.get_logger()


class ASGIAdapter:
    """Serve a chainmux handler as an ASGI application.

    Each HTTP request gets a fresh :class:`~chainmux.response.ResponseWriter`
    and the adapter's root context; the buffered response is sent once the
    handler returns. Exceptions are not caught here, that is the job of
    :class:`~chainmux.middleware.RecoveryMiddleware`.
    """

    def __init__(self, handler: Handler, root_context: Optional[Context] = None) -> None:
        self.handler = handler
        self.root_context = root_context if root_context is not None else Context.background()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            await self._serve_http(scope, receive, send)
        elif scope["type"] == "lifespan":
            await self._serve_lifespan(receive, send)
        else:
            raise RuntimeError(f"unsupported ASGI scope type: {scope['type']!r}")

    async def _serve_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        writer = ResponseWriter()
        await self.handler(self.root_context, writer, request)
        response = writer.to_response()
        await response(scope, receive, send)

    async def _serve_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.info("server_started")
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                logger.info("server_stopping")
                await send({"type": "lifespan.shutdown.complete"})
                return


def serve(app: Any, settings: ServerSettings) -> None:
    """Run ``app`` under uvicorn until interrupted.

    uvicorn logs through the root handler installed by
    :func:`~chainmux.logging.setup_logging`. A failure to bind is logged by
    uvicorn and ends the process with a non-zero status.
    """
    logger.info("server_listening", host=settings.listen_host, port=settings.port)
    uvicorn.run(
        app,
        host=settings.listen_host,
        port=settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=False,
        lifespan="on",
    )
