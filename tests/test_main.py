"""Tests for the command-line entry point."""

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LISTEN_PORT", "LISTEN_HOST", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


class TestMain:
    def test_cli_overrides_settings(self):
        from chainmux.__main__ import load_settings, parse_args

        settings = load_settings(parse_args(["--port", "9000", "--host", "127.0.0.1", "--log-level", "debug"]))
        assert settings.port == 9000
        assert settings.listen_host == "127.0.0.1"
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "console"

    def test_serves_configured_app(self, monkeypatch, capsys):
        from chainmux import __main__ as cli
        from chainmux.server import ASGIAdapter

        served = {}

        def fake_serve(app, settings):
            served["app"] = app
            served["settings"] = settings

        monkeypatch.setattr(cli, "serve", fake_serve)
        assert cli.main(["--port", "8082", "--log-format", "json"]) == 0
        assert isinstance(served["app"], ASGIAdapter)
        assert served["settings"].port == 8082
        assert served["app"].handler.routes() == [("GET", "/v1/hello"), ("GET", "/static/hello")]
        assert "route_registered" in capsys.readouterr().err

    def test_invalid_configuration_exits_2(self, monkeypatch, capsys):
        from chainmux import __main__ as cli

        monkeypatch.setenv("LISTEN_PORT", "not-a-port")
        monkeypatch.setattr(cli, "serve", lambda app, settings: pytest.fail("should not serve"))
        assert cli.main([]) == 2
        assert "invalid_configuration" in capsys.readouterr().err

    def test_cli_override_wins_over_invalid_env(self, monkeypatch):
        from chainmux.__main__ import load_settings, parse_args

        monkeypatch.setenv("LOG_LEVEL", "verbose")
        monkeypatch.setenv("LISTEN_PORT", "not-a-port")
        settings = load_settings(parse_args(["--log-level", "DEBUG", "--port", "8090"]))
        assert settings.log_level == "DEBUG"
        assert settings.port == 8090

    def test_invalid_env_without_override_still_rejected(self, monkeypatch):
        from chainmux.__main__ import load_settings, parse_args
        from chainmux.errors import ConfigurationError

        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ConfigurationError):
            load_settings(parse_args([]))
