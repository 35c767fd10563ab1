"""Structured logging for chainmux."""

from chainmux.logging.performance import log_duration
from chainmux.logging.setup import create_base_logger, get_logger, setup_logging

__all__ = ["create_base_logger", "get_logger", "log_duration", "setup_logging"]
