"""Endpoint handlers and application wiring."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, NamedTuple, Optional, Union

import structlog
from starlette.requests import Request

from chainmux.chain import Chain
from chainmux.config import ServerSettings
from chainmux.context import Context, logger_from_context
from chainmux.logging import create_base_logger
from chainmux.middleware import (
    AuthMiddleware,
    LoggerBindingMiddleware,
    RecoveryMiddleware,
    TimingMiddleware,
)
from chainmux.response import ResponseWriter
from chainmux.router import Mux
from chainmux.server import ASGIAdapter


class HandlerResult(NamedTuple):
    """What an endpoint reports back to :class:`AppHandler`."""

    status: int
    result: Any = None
    error: Optional[Union[Exception, str]] = None


Endpoint = Callable[[Context, ResponseWriter, Request], Awaitable[HandlerResult]]


@dataclass(frozen=True)
class App:
    """Application identity reported on every instrumented call."""

    role: str


async def hello(ctx: Context, writer: ResponseWriter, request: Request) -> HandlerResult:
    log = logger_from_context(ctx)
    writer.write("api hello!")
    log.debug("api_hello_served")
    return HandlerResult(HTTPStatus.OK, "ok")


async def static_hello(ctx: Context, writer: ResponseWriter, request: Request) -> HandlerResult:
    log = logger_from_context(ctx)
    writer.write("static hello!")
    log.debug("static_hello_served")
    return HandlerResult(HTTPStatus.OK, "ok")


class AppHandler:
    """Adapt an :data:`Endpoint` to the chain handler shape and log its outcome.

    A reported error is logged but does not change the response: whatever
    status and body the endpoint wrote is what the client gets. An endpoint
    that wrote nothing gets its returned status committed with an empty body.
    """

    def __init__(self, app: App, endpoint: Endpoint) -> None:
        self.app = app
        self.endpoint = endpoint

    async def __call__(self, ctx: Context, writer: ResponseWriter, request: Request) -> None:
        log = logger_from_context(ctx)
        log.info("app_handler_invoked", app_role=self.app.role)
        status, result, error = await self.endpoint(ctx, writer, request)
        if not writer.committed:
            writer.write_header(status)
        if error is not None:
            log.error("handler_reported_error", error=str(error), status=int(status))
        log.debug("handler_result", status=int(status), result=result)


def build_chains(
    base_logger: structlog.stdlib.BoundLogger, request_id_header: str = "Request-Id"
) -> tuple[Chain, Chain]:
    """Return ``(base_chain, api_chain)``; the API chain adds authentication."""
    base_chain = Chain(
        RecoveryMiddleware(),
        TimingMiddleware(),
        LoggerBindingMiddleware(base_logger, request_id_header=request_id_header),
    )
    api_chain = base_chain.with_(AuthMiddleware())
    return base_chain, api_chain


def build_mux(settings: ServerSettings, base_logger: structlog.stdlib.BoundLogger) -> Mux:
    """Register ``GET /v1/hello`` and ``GET /static/hello``."""
    base_chain, api_chain = build_chains(base_logger, settings.request_id_header)
    app = App(role=settings.app_role)
    mux = Mux()

    api = mux.new_group("/v1", chain=api_chain)
    api.get("/hello", AppHandler(app, hello))

    static = mux.new_group("/static", chain=base_chain)
    static.get("/hello", AppHandler(app, static_hello))
    return mux


def create_app(
    settings: Optional[ServerSettings] = None,
    base_logger: Optional[structlog.stdlib.BoundLogger] = None,
) -> ASGIAdapter:
    """Build the ASGI application.

    Logging must already be configured; ``base_logger`` defaults to
    :func:`~chainmux.logging.create_base_logger` for ``settings``.
    """
    settings = settings or ServerSettings()
    if base_logger is None:
        base_logger = create_base_logger(settings)
    return ASGIAdapter(build_mux(settings, base_logger))
