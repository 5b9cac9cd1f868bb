"""Transports that attach the MCP server to stdio or streamable HTTP."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator
from typing import Any

import uvicorn
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.routing import Route

from .server import AppSignalMCPServer

logger = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "http")
MCP_HTTP_PATH = "/mcp"


async def run_stdio(app: AppSignalMCPServer) -> None:
    """Serve over the process's stdin/stdout until stdin closes."""
    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.connect(read_stream, write_stream)
    finally:
        await app.close()


class _StreamableHTTPEndpoint:
    """ASGI endpoint forwarding every request to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def create_http_app(app: AppSignalMCPServer) -> Starlette:
    """Create a Starlette app serving MCP streamable HTTP at ``/mcp``.

    Sessions are stateless; every request carries its own MCP exchange.
    The client is closed when the app's lifespan ends.
    """
    session_manager = StreamableHTTPSessionManager(
        app=app.server,
        json_response=False,
        stateless=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(_: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            try:
                yield
            finally:
                await app.close()

    return Starlette(
        routes=[Route(MCP_HTTP_PATH, endpoint=_StreamableHTTPEndpoint(session_manager))],
        lifespan=lifespan,
    )


async def run_http(app: AppSignalMCPServer, host: str, port: int) -> None:
    """Serve streamable HTTP with uvicorn until interrupted."""
    config = uvicorn.Config(
        create_http_app(app),
        host=host,
        port=port,
        log_level="warning",
    )
    logger.info("Listening on http://%s:%d%s", host, port, MCP_HTTP_PATH)
    await uvicorn.Server(config).serve()


async def serve(app: AppSignalMCPServer, transport: str, host: str, port: int) -> None:
    if transport == "stdio":
        await run_stdio(app)
    elif transport == "http":
        await run_http(app, host, port)
    else:
        raise ValueError(f"Unknown transport: {transport}")
