"""Tests for the API server command line."""

from unittest.mock import patch

import pytest

from reel_buzz.web.main import main, parse_args


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.host is None
        assert args.port is None
        assert args.reload is None
        assert args.log_level is None

    def test_overrides(self):
        args = parse_args(["--host", "127.0.0.1", "--port", "9000", "--no-reload", "--log-level", "warning"])
        assert args.host == "127.0.0.1"
        assert args.port == 9000
        assert args.reload is False
        assert args.log_level == "warning"

    @pytest.mark.parametrize("port", ["abc", "0", "70000"])
    def test_invalid_port(self, port):
        with pytest.raises(SystemExit):
            parse_args(["--port", port])


class TestMain:
    def test_uses_settings_by_default(self, monkeypatch):
        monkeypatch.setenv("API_HOST", "0.0.0.0")
        monkeypatch.setenv("API_PORT", "8100")
        monkeypatch.setenv("API_DEBUG", "true")

        with patch("reel_buzz.web.main.uvicorn.run") as run:
            main([])

        run.assert_called_once_with(
            "reel_buzz.web.main:app",
            host="0.0.0.0",
            port=8100,
            reload=True,
            log_level="debug",
        )

    def test_cli_overrides_settings(self, monkeypatch):
        monkeypatch.setenv("API_DEBUG", "true")

        with patch("reel_buzz.web.main.uvicorn.run") as run:
            main(["--port", "9000", "--no-reload", "--log-level", "info"])

        kwargs = run.call_args.kwargs
        assert kwargs["port"] == 9000
        assert kwargs["reload"] is False
        assert kwargs["log_level"] == "info"
