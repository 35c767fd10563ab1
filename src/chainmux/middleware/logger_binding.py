"""Per-request logger binding middleware."""

import uuid
from dataclasses import dataclass
from typing import Any, Optional

import structlog
from starlette.requests import Request

from chainmux.chain import Handler, Middleware
from chainmux.context import LOGGER_KEY, REQUEST_ID_KEY, Context
from chainmux.response import ResponseWriter

DEFAULT_REQUEST_ID_HEADER = "Request-Id"


@dataclass(frozen=True)
class LogFieldNames:
    """Names of the request fields bound onto the per-request logger."""

    method: str = "method"
    url: str = "url"
    ip: str = "ip"
    user_agent: str = "user_agent"
    referer: str = "referer"
    request_id: str = "req_id"


def request_uri(request: Request) -> str:
    """Return the request target as sent by the client: path plus query string.

    The still-encoded ``raw_path`` is preferred so percent escapes are logged
    as received.
    """
    raw_path = request.scope.get("raw_path")
    path = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else request.url.path
    query = request.url.query
    return f"{path}?{query}" if query else path


def new_request_id() -> str:
    return str(uuid.uuid4())


class LoggerBindingMiddleware(Middleware):
    """Derive a request logger from the base logger and store it in the context.

    The derived logger carries the method, request URI, remote IP, user agent,
    referer and request ID on top of whatever static fields the base logger
    already has. Empty user agent/referer and an unknown remote address are
    left out. The request ID comes from ``request_id_header`` when the client
    sends one, otherwise a UUID4 is generated; either way it is echoed in the
    same response header and stored under
    :data:`~chainmux.context.REQUEST_ID_KEY`.
    """

    def __init__(
        self,
        base_logger: structlog.stdlib.BoundLogger,
        field_names: LogFieldNames = LogFieldNames(),
        request_id_header: str = DEFAULT_REQUEST_ID_HEADER,
    ) -> None:
        self._base_logger = base_logger
        self._fields = field_names
        self._request_id_header = request_id_header

    def request_fields(self, request: Request, request_id: str) -> dict[str, Any]:
        names = self._fields
        fields: dict[str, Any] = {
            names.method: request.method,
            names.url: request_uri(request),
        }
        remote_ip: Optional[str] = request.client.host if request.client else None
        if remote_ip:
            fields[names.ip] = remote_ip
        user_agent = request.headers.get("user-agent")
        if user_agent:
            fields[names.user_agent] = user_agent
        referer = request.headers.get("referer")
        if referer:
            fields[names.referer] = referer
        fields[names.request_id] = request_id
        return fields

    def wrap(self, next_handler: Handler) -> Handler:
        async def bind(ctx: Context, writer: ResponseWriter, request: Request) -> None:
            request_id = request.headers.get(self._request_id_header) or new_request_id()
            writer.headers[self._request_id_header] = request_id
            request_logger = self._base_logger.bind(**self.request_fields(request, request_id))
            ctx = ctx.derive(LOGGER_KEY, request_logger).derive(REQUEST_ID_KEY, request_id)
            await next_handler(ctx, writer, request)

        return bind
