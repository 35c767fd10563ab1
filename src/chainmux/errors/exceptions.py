"""Structured exception hierarchy for chainmux."""

from typing import Any


class ChainmuxError(Exception):
    """Base exception for all chainmux errors.

    Attributes:
        status_code: HTTP status code associated with the error.
        error_code: Machine-readable error identifier.
        context: Arbitrary key-value pairs providing additional error context.
    """

    status_code: int = 500

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR", **context: Any) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = context


class ConfigurationError(ChainmuxError):
    """Settings could not be loaded or failed validation."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="CONFIGURATION_ERROR", **context)


class RouteConfigurationError(ChainmuxError):
    """A route or group was declared with an invalid prefix, path or method."""

    def __init__(self, message: str, error_code: str = "ROUTE_CONFIGURATION_ERROR", **context: Any) -> None:
        super().__init__(message, error_code=error_code, **context)


class RouteConflictError(RouteConfigurationError):
    """The same method and full path were registered twice."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="ROUTE_CONFLICT", **context)


class ResponseCommittedError(ChainmuxError):
    """A status was written to a response that already has one."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="RESPONSE_COMMITTED", **context)
