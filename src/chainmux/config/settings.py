"""Environment-based server configuration."""

import os
import socket
from dataclasses import dataclass, field

from chainmux.errors import ConfigurationError

LOG_FORMATS = frozenset({"console", "json"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer", variable=name, value=raw) from exc


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment variables.

    ``role`` and ``hostname`` become static fields on the base logger;
    ``app_role`` is the identity reported by the instrumentation wrapper.
    """

    role: str = field(default_factory=lambda: os.getenv("SERVICE_ROLE", "my-service"))
    app_role: str = field(default_factory=lambda: os.getenv("APP_ROLE", "test-server"))
    hostname: str = field(default_factory=lambda: os.getenv("SERVICE_HOST") or socket.gethostname())
    listen_host: str = field(default_factory=lambda: os.getenv("LISTEN_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("LISTEN_PORT", 8081))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console"))
    request_id_header: str = field(default_factory=lambda: os.getenv("REQUEST_ID_HEADER", "Request-Id"))

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_level", self.log_level.upper())
        object.__setattr__(self, "log_format", self.log_format.lower())
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"unknown log level {self.log_level!r}", log_level=self.log_level)
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"unknown log format {self.log_format!r}", log_format=self.log_format)
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"port {self.port} out of range", port=self.port)
