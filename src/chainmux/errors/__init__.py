"""Structured error hierarchy for chainmux."""

from chainmux.errors.exceptions import (
    ChainmuxError,
    ConfigurationError,
    ResponseCommittedError,
    RouteConfigurationError,
    RouteConflictError,
)

__all__ = [
    "ChainmuxError",
    "ConfigurationError",
    "ResponseCommittedError",
    "RouteConfigurationError",
    "RouteConflictError",
]
