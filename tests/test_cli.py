"""Tests for the appsignal-mcp command."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest
from click.testing import CliRunner
from rich.logging import RichHandler

from appsignal_mcp import cli

from conftest import API_TOKEN


@pytest.fixture(autouse=True)
def root_logging():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.setLevel(level)
    for name in cli.QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("APPSIGNAL_API_TOKEN", "APPSIGNAL_APP_ID", "PORT", "HOST", "APPSIGNAL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def credentials(runner, monkeypatch):
    monkeypatch.setenv("APPSIGNAL_API_TOKEN", "tok")
    monkeypatch.setenv("APPSIGNAL_APP_ID", "app")


@pytest.fixture
def serve(monkeypatch):
    mock = AsyncMock()
    monkeypatch.setattr(cli, "serve", mock)
    return mock


class TestMain:
    """Tests for argument handling and startup of the main command."""

    def test_missing_credentials_exit_before_transport(self, runner, serve):
        result = runner.invoke(cli.main, [])

        assert result.exit_code == 1
        assert "APPSIGNAL_API_TOKEN" in result.output
        serve.assert_not_called()

    def test_stdio_is_default(self, runner, credentials, serve):
        result = runner.invoke(cli.main, [])

        assert result.exit_code == 0, result.output
        app, transport, host, port = serve.call_args.args
        assert transport == "stdio"
        assert app.client.app_id == "app"
        assert (host, port) == ("127.0.0.1", 3000)

    def test_http_with_port_option(self, runner, credentials, serve):
        result = runner.invoke(cli.main, ["http", "--port", "8080", "--host", "0.0.0.0"])

        assert result.exit_code == 0, result.output
        _, transport, host, port = serve.call_args.args
        assert (transport, host, port) == ("http", "0.0.0.0", 8080)

    def test_port_from_environment(self, runner, credentials, serve, monkeypatch):
        monkeypatch.setenv("PORT", "4000")

        result = runner.invoke(cli.main, ["http"])

        assert result.exit_code == 0, result.output
        assert serve.call_args.args[3] == 4000

    def test_unknown_transport(self, runner, credentials, serve):
        result = runner.invoke(cli.main, ["carrier-pigeon"])

        assert result.exit_code == 2
        serve.assert_not_called()

    def test_startup_failure_exits_nonzero(self, runner, credentials, serve):
        serve.side_effect = OSError("address already in use")

        result = runner.invoke(cli.main, ["http"])

        assert result.exit_code == 1
        assert "Error starting server: address already in use" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli.main, ["--version"])
        assert result.exit_code == 0
        assert "appsignal-mcp" in result.output


class TestConfigureLogging:
    """Tests for log setup."""

    def test_sets_root_level(self, root_logging):
        cli.configure_logging("info")

        assert root_logging.level == logging.INFO
        assert any(isinstance(h, RichHandler) for h in root_logging.handlers)

    def test_http_library_loggers_quieted(self):
        cli.configure_logging("DEBUG")

        for name in cli.QUIET_LOGGERS:
            assert logging.getLogger(name).getEffectiveLevel() == logging.WARNING

    def test_token_never_logged(self, root_logging, client, appsignal, incident_payload, caplog):
        cli.configure_logging("DEBUG")
        root_logging.addHandler(caplog.handler)
        appsignal.respond_app(incident=incident_payload)

        asyncio.run(client.get_incident(5321))

        assert any(record.name == "appsignal_mcp.client" for record in caplog.records)
        assert API_TOKEN not in caplog.text
