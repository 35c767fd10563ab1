"""Command-line entry point: ``python -m chainmux``."""

import argparse
import sys
from typing import Optional

import structlog

from chainmux.app import build_mux
from chainmux.config import ServerSettings
from chainmux.errors import ConfigurationError
from chainmux.logging import create_base_logger, setup_logging
from chainmux.server import ASGIAdapter, serve

logger = structlog.get_logger()


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="chainmux hello server")
    parser.add_argument("--host", type=str, help="Listen address (default: LISTEN_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: LISTEN_PORT or 8081)")
    parser.add_argument("--log-level", type=str, help="Minimum log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-format", choices=["console", "json"], help="Log renderer")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> ServerSettings:
    overrides = {
        "listen_host": args.host,
        "port": args.port,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    return ServerSettings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except ConfigurationError as exc:
        setup_logging()
        logger.error("invalid_configuration", error=str(exc), **exc.context)
        return 2

    setup_logging(settings.log_level, settings.log_format)
    base_logger = create_base_logger(settings)
    mux = build_mux(settings, base_logger)
    for method, path in mux.routes():
        base_logger.info("route_registered", method=method, path=path)
    serve(ASGIAdapter(mux), settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
