"""Tests for the ASGI adapter and the uvicorn entry point."""

import pytest
from starlette.testclient import TestClient


async def hello(ctx, writer, request):
    writer.write("hi")


class TestASGIAdapter:
    def test_serves_http(self):
        from chainmux.server import ASGIAdapter

        resp = TestClient(ASGIAdapter(hello)).get("/anything")
        assert resp.status_code == 200
        assert resp.text == "hi"

    def test_handler_receives_root_context(self):
        from chainmux.context import Context, ContextKey
        from chainmux.server import ASGIAdapter

        key = ContextKey("process")
        root = Context.background().derive(key, "root-value")

        async def handler(ctx, writer, request):
            writer.write(ctx.lookup(key))

        assert TestClient(ASGIAdapter(handler, root_context=root)).get("/").text == "root-value"

    def test_uncaught_exception_propagates_without_recovery(self):
        from chainmux.server import ASGIAdapter

        async def broken(ctx, writer, request):
            raise RuntimeError("no recovery configured")

        with pytest.raises(RuntimeError):
            TestClient(ASGIAdapter(broken)).get("/")

    def test_lifespan_startup_and_shutdown(self, json_logs):
        from chainmux.server import ASGIAdapter

        with TestClient(ASGIAdapter(hello)) as client:
            assert client.get("/").status_code == 200
        events = [e["event"] for e in json_logs()]
        assert "server_started" in events
        assert "server_stopping" in events

    @pytest.mark.asyncio
    async def test_rejects_unsupported_scope(self):
        from chainmux.server import ASGIAdapter

        async def receive():
            return {}

        async def send(message):
            pass

        with pytest.raises(RuntimeError, match="websocket"):
            await ASGIAdapter(hello)({"type": "websocket"}, receive, send)


class TestServe:
    def test_runs_uvicorn_with_settings(self, settings, monkeypatch, json_logs):
        from chainmux import server

        calls = {}

        def fake_run(app, **kwargs):
            calls["app"] = app
            calls.update(kwargs)

        monkeypatch.setattr(server.uvicorn, "run", fake_run)
        app = server.ASGIAdapter(hello)
        server.serve(app, settings)

        assert calls["app"] is app
        assert calls["host"] == "0.0.0.0"
        assert calls["port"] == 8081
        assert calls["log_config"] is None
        listening = [e for e in json_logs() if e["event"] == "server_listening"]
        assert listening[0]["port"] == 8081

    def test_bind_failure_exits_nonzero(self, settings, monkeypatch):
        from chainmux import server

        def fake_run(app, **kwargs):
            raise SystemExit(1)

        monkeypatch.setattr(server.uvicorn, "run", fake_run)
        with pytest.raises(SystemExit) as exc_info:
            server.serve(server.ASGIAdapter(hello), settings)
        assert exc_info.value.code == 1
