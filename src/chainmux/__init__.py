"""chainmux - middleware chains, context-bound structured logging and route groups."""

__version__ = "0.1.0"

from chainmux.app import App, AppHandler, HandlerResult, create_app
from chainmux.chain import Chain, Handler, Middleware
from chainmux.config import ServerSettings
from chainmux.context import (
    LOGGER_KEY,
    REQUEST_ID_KEY,
    Context,
    ContextKey,
    logger_from_context,
    request_id_from_context,
)
from chainmux.errors import (
    ChainmuxError,
    ConfigurationError,
    ResponseCommittedError,
    RouteConfigurationError,
    RouteConflictError,
)
from chainmux.logging import create_base_logger, get_logger, log_duration, setup_logging
from chainmux.middleware import (
    AuthMiddleware,
    LogFieldNames,
    LoggerBindingMiddleware,
    RecoveryMiddleware,
    TimingMiddleware,
)
from chainmux.response import ResponseWriter
from chainmux.router import Group, Mux
from chainmux.server import ASGIAdapter, serve

__all__ = [
    "ASGIAdapter",
    "App",
    "AppHandler",
    "AuthMiddleware",
    "Chain",
    "ChainmuxError",
    "ConfigurationError",
    "Context",
    "ContextKey",
    "Group",
    "Handler",
    "HandlerResult",
    "LOGGER_KEY",
    "LogFieldNames",
    "LoggerBindingMiddleware",
    "Middleware",
    "Mux",
    "REQUEST_ID_KEY",
    "RecoveryMiddleware",
    "ResponseCommittedError",
    "ResponseWriter",
    "RouteConfigurationError",
    "RouteConflictError",
    "ServerSettings",
    "TimingMiddleware",
    "create_app",
    "create_base_logger",
    "get_logger",
    "log_duration",
    "logger_from_context",
    "request_id_from_context",
    "serve",
]
