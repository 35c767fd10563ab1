"""Shared fixtures for chainmux tests."""

import io
import json
from typing import Optional

import pytest
from starlette.requests import Request


def parse_log_events(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


def make_request(
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    headers: Optional[dict[str, str]] = None,
    client: Optional[tuple[str, int]] = ("10.0.0.7", 52100),
    raw_path: Optional[bytes] = None,
) -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "root_path": "",
        "scheme": "http",
        "query_string": query_string,
        "server": ("testserver", 80),
        "client": client,
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    if raw_path is not None:
        scope["raw_path"] = raw_path
    return Request(scope)


@pytest.fixture
def json_logs():
    """Configure JSON logging at DEBUG into a buffer and return a reader.

    Each call returns the events emitted since the previous call.
    """
    from chainmux.logging import setup_logging

    buffer = io.StringIO()
    setup_logging(log_level="DEBUG", log_format="json", stream=buffer)
    consumed = 0

    def read() -> list[dict]:
        nonlocal consumed
        text = buffer.getvalue()
        fresh, consumed = text[consumed:], len(text)
        return parse_log_events(fresh)

    return read


@pytest.fixture
def settings():
    from chainmux.config import ServerSettings

    return ServerSettings(role="my-service", app_role="test-server", hostname="test-host")
