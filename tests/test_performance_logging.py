"""Tests for duration logging."""

import json
import time

import pytest


class TestLogDuration:
    def test_logs_duration(self, capsys):
        from chainmux.logging import get_logger, log_duration, setup_logging

        setup_logging(log_format="json")
        with log_duration(get_logger(), "slow_op"):
            time.sleep(0.01)
        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["event"] == "slow_op"
        assert data["duration_ms"] >= 10

    def test_extra_fields(self, capsys):
        from chainmux.logging import get_logger, log_duration, setup_logging

        setup_logging(log_format="json")
        with log_duration(get_logger(), "request_timed", method="GET", url="/v1/hello"):
            pass
        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["method"] == "GET"
        assert data["url"] == "/v1/hello"

    def test_logs_on_exception(self, capsys):
        from chainmux.logging import get_logger, log_duration, setup_logging

        setup_logging(log_format="json")
        with pytest.raises(ValueError):
            with log_duration(get_logger(), "failing_op"):
                raise ValueError("boom")
        lines = [line for line in capsys.readouterr().err.strip().split("\n") if line.strip()]
        last = json.loads(lines[-1])
        assert last["event"] == "failing_op_failed"
        assert last["level"] == "error"
        assert "duration_ms" in last
        assert "ValueError: boom" in last["exception"]
