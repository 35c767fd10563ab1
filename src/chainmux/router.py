"""Exact-match router with prefix groups."""

from http import HTTPStatus
from typing import Optional

from starlette.requests import Request

from chainmux.chain import Chain, Handler
from chainmux.context import Context
from chainmux.errors import RouteConfigurationError, RouteConflictError
from chainmux.response import ResponseWriter


async def not_found(ctx: Context, writer: ResponseWriter, request: Request) -> None:
    writer.error(HTTPStatus.NOT_FOUND)


def _normalize_prefix(prefix: str) -> str:
    if not prefix.startswith("/"):
        raise RouteConfigurationError(f"group prefix must begin with '/': {prefix!r}", prefix=prefix)
    if prefix == "/":
        return ""
    if prefix.endswith("/"):
        raise RouteConfigurationError(f"group prefix must not end with '/': {prefix!r}", prefix=prefix)
    return prefix


class Mux:
    """Route table mapping ``(method, path)`` to a handler.

    Routes are registered at startup through :meth:`new_group` (or
    :meth:`register` for root-level routes) and only read afterwards, so
    dispatch needs no locking. The mux is itself a handler and can be wrapped
    by a chain or served directly.
    """

    def __init__(self, not_found: Handler = not_found) -> None:
        self._routes: dict[tuple[str, str], Handler] = {}
        self._not_found = not_found

    def new_group(self, prefix: str, chain: Optional[Chain] = None) -> "Group":
        return Group(self, _normalize_prefix(prefix), chain)

    def register(self, method: str, path: str, handler: Handler) -> None:
        if not method or not method.isalpha():
            raise RouteConfigurationError(f"invalid HTTP method: {method!r}", method=method)
        if not path.startswith("/"):
            raise RouteConfigurationError(f"path must begin with '/': {path!r}", path=path)
        key = (method.upper(), path)
        if key in self._routes:
            raise RouteConflictError(f"route already registered: {key[0]} {path}", method=key[0], path=path)
        self._routes[key] = handler

    def lookup(self, method: str, path: str) -> Optional[Handler]:
        return self._routes.get((method.upper(), path))

    def routes(self) -> list[tuple[str, str]]:
        return list(self._routes)

    async def __call__(self, ctx: Context, writer: ResponseWriter, request: Request) -> None:
        handler = self.lookup(request.method, request.url.path)
        if handler is None:
            handler = self._not_found
        await handler(ctx, writer, request)


class Group:
    """Routes sharing a path prefix and, optionally, a chain.

    A group with a chain builds it around every handler it registers. Groups
    never share chain state: each holds its own immutable
    :class:`~chainmux.chain.Chain`.
    """

    def __init__(self, mux: Mux, prefix: str, chain: Optional[Chain] = None) -> None:
        self._mux = mux
        self.prefix = prefix
        self.chain = chain

    def new_group(self, prefix: str, chain: Optional[Chain] = None) -> "Group":
        return Group(self._mux, self.prefix + _normalize_prefix(prefix), chain)

    def register(self, method: str, path: str, handler: Handler) -> None:
        if not path.startswith("/"):
            raise RouteConfigurationError(f"path must begin with '/': {path!r}", path=path)
        if self.chain is not None:
            handler = self.chain.build(handler)
        self._mux.register(method, self.prefix + path, handler)

    def get(self, path: str, handler: Handler) -> None:
        self.register("GET", path, handler)

    def post(self, path: str, handler: Handler) -> None:
        self.register("POST", path, handler)

    def put(self, path: str, handler: Handler) -> None:
        self.register("PUT", path, handler)

    def delete(self, path: str, handler: Handler) -> None:
        self.register("DELETE", path, handler)
