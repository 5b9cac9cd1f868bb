"""CLI entry point for appsignal-mcp."""

import asyncio
import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .config import Settings
from .errors import ConfigurationError
from .server import AppSignalMCPServer
from .transports import TRANSPORTS, serve

# stdout carries the stdio protocol; everything human-readable goes to stderr
console = Console(stderr=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# httpx logs request URLs at INFO, and the URL carries the API token
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@click.command()
@click.argument("transport", type=click.Choice(TRANSPORTS), default="stdio", required=False)
@click.option("--port", type=int, default=None, help="Port for HTTP mode (default: $PORT or 3000)")
@click.option("--host", default=None, help="Bind address for HTTP mode (default: $HOST or 127.0.0.1)")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: $APPSIGNAL_LOG_LEVEL or WARNING)",
)
@click.version_option(__version__, prog_name="appsignal-mcp")
def main(transport: str, port: int | None, host: str | None, log_level: str | None) -> None:
    """Serve AppSignal incidents to MCP clients.

    Requires APPSIGNAL_API_TOKEN and APPSIGNAL_APP_ID, read from the
    environment or a .env file.

    Examples:
        appsignal-mcp
        appsignal-mcp http --port 8080
    """
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)

    overrides = {
        key: value
        for key, value in (("port", port), ("host", host), ("log_level", log_level))
        if value is not None
    }
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)

    if transport == "http":
        console.print(
            f"Starting MCP server with HTTP transport on {settings.host}:{settings.port}..."
        )
    else:
        console.print("Starting MCP server with stdio transport...")

    app = AppSignalMCPServer.from_settings(settings)
    try:
        asyncio.run(serve(app, transport, settings.host, settings.port))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        console.print(f"[red]Error starting server: {escape(str(e))}[/red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
