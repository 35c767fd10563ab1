"""Immutable request-scoped context.

A :class:`Context` is a linked chain of single key/value links. Deriving a
child never touches the parent, so a middleware can hand an extended context
to the next handler while every other holder keeps seeing the original.
Nothing here is shared between requests unless a caller derives from the
same root, and the root carries no values.
"""

from typing import Any, Generic, Optional, TypeVar

import structlog

T = TypeVar("T")

_MISSING = object()


class ContextKey(Generic[T]):
    """Typed key for :class:`Context` values.

    Keys compare by identity: two keys created with the same name are
    distinct, so packages cannot clobber each other's values.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r})"


class Context:
    """One link in an immutable key/value chain."""

    __slots__ = ("_parent", "_key", "_value")

    def __init__(
        self,
        parent: Optional["Context"] = None,
        key: Optional[ContextKey[Any]] = None,
        value: Any = None,
    ) -> None:
        self._parent = parent
        self._key = key
        self._value = value

    @classmethod
    def background(cls) -> "Context":
        """Return an empty root context."""
        return cls()

    def derive(self, key: ContextKey[T], value: T) -> "Context":
        """Return a child that resolves ``key`` to ``value`` and defers to ``self`` otherwise."""
        return Context(self, key, value)

    def _find(self, key: ContextKey[Any]) -> Any:
        node: Optional[Context] = self
        while node is not None:
            if node._key is key:
                return node._value
            node = node._parent
        return _MISSING

    def lookup(self, key: ContextKey[T], default: Optional[T] = None) -> Optional[T]:
        value = self._find(key)
        return default if value is _MISSING else value

    def __contains__(self, key: ContextKey[Any]) -> bool:
        return self._find(key) is not _MISSING

    def __repr__(self) -> str:
        keys = []
        node: Optional[Context] = self
        while node is not None:
            if node._key is not None:
                keys.append(node._key.name)
            node = node._parent
        return f"Context(keys={keys!r})"


LOGGER_KEY: ContextKey[structlog.stdlib.BoundLogger] = ContextKey("logger")
REQUEST_ID_KEY: ContextKey[str] = ContextKey("request_id")

_fallback_logger = structlog.get_logger("chainmux")


def logger_from_context(ctx: Context) -> structlog.stdlib.BoundLogger:
    """Return the request logger bound by the logger binding middleware.

    Falls back to the package logger so handlers can log unconditionally.
    """
    logger = ctx.lookup(LOGGER_KEY)
    if logger is None:
        return _fallback_logger
    return logger


def request_id_from_context(ctx: Context) -> Optional[str]:
    return ctx.lookup(REQUEST_ID_KEY)
