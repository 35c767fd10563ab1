"""Middleware chain composition.

A handler has the shape ``async handler(ctx, writer, request) -> None``. A
middleware turns one handler into another. :class:`Chain` keeps an ordered,
immutable sequence of middlewares and folds them around a terminal handler
so the first middleware is the outermost wrapper: it runs first on the way
in and last on the way out.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from typing import Union

from starlette.requests import Request

from chainmux.context import Context
from chainmux.response import ResponseWriter

Handler = Callable[[Context, ResponseWriter, Request], Awaitable[None]]


class Middleware(ABC):
    """Class-based middleware.

    Subclasses implement :meth:`wrap`. Instances are callable with a handler,
    so they mix freely with plain ``handler -> handler`` functions in a
    :class:`Chain`. Instances must hold no per-request state; anything a
    request needs travels through the :class:`~chainmux.context.Context`.
    """

    @abstractmethod
    def wrap(self, next_handler: Handler) -> Handler:
        """Return a handler that adds this middleware's behavior around ``next_handler``."""

    def __call__(self, next_handler: Handler) -> Handler:
        return self.wrap(next_handler)


MiddlewareLike = Union[Middleware, Callable[[Handler], Handler]]


class Chain:
    """Immutable ordered sequence of middlewares."""

    __slots__ = ("_middlewares",)

    def __init__(self, *middlewares: MiddlewareLike) -> None:
        for middleware in middlewares:
            if not callable(middleware):
                raise TypeError(f"middleware must be callable, got {middleware!r}")
        self._middlewares: tuple[MiddlewareLike, ...] = tuple(middlewares)

    @property
    def middlewares(self) -> tuple[MiddlewareLike, ...]:
        return self._middlewares

    def add(self, *middlewares: MiddlewareLike) -> "Chain":
        """Return a new chain with ``middlewares`` appended."""
        return Chain(*self._middlewares, *middlewares)

    def with_(self, *middlewares: MiddlewareLike) -> "Chain":
        """Specialize a shared base chain; the receiver is left as it was."""
        return self.add(*middlewares)

    def build(self, handler: Handler) -> Handler:
        """Wrap ``handler`` so that ``Chain(a, b).build(h)`` behaves as ``a(b(h))``.

        Building has no side effects on the chain, so the same chain can be
        built around any number of handlers.
        """
        composed = handler
        for middleware in reversed(self._middlewares):
            composed = middleware(composed)
        return composed

    def __len__(self) -> int:
        return len(self._middlewares)

    def __iter__(self) -> Iterator[MiddlewareLike]:
        return iter(self._middlewares)

    def __repr__(self) -> str:
        names = [getattr(m, "__name__", type(m).__name__) for m in self._middlewares]
        return f"Chain({', '.join(names)})"
