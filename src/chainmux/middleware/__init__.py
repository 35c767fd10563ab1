"""Middleware variants for chainmux chains."""

from chainmux.middleware.auth import AuthMiddleware
from chainmux.middleware.logger_binding import LogFieldNames, LoggerBindingMiddleware
from chainmux.middleware.recovery import RecoveryMiddleware
from chainmux.middleware.timing import TimingMiddleware

__all__ = [
    "AuthMiddleware",
    "LogFieldNames",
    "LoggerBindingMiddleware",
    "RecoveryMiddleware",
    "TimingMiddleware",
]
