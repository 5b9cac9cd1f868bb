"""MCP server exposing AppSignal incidents as resources, tools and prompts."""

from __future__ import annotations

import logging
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import CallToolResult, GetPromptResult, Prompt, Resource, ResourceTemplate, Tool

from . import __version__, prompts, resources, tools
from .client import AppSignalClient
from .config import Settings

logger = logging.getLogger(__name__)

SERVER_NAME = "AppSignal MCP"


class AppSignalMCPServer:
    """Binds one ``AppSignalClient`` to a low-level MCP ``Server``.

    The handlers registered here only forward to the stateless functions in
    ``tools``, ``resources`` and ``prompts``, passing the client explicitly.

    Example:
        app = AppSignalMCPServer(AppSignalClient(token, app_id))
        async with stdio_server() as (read_stream, write_stream):
            await app.connect(read_stream, write_stream)
    """

    def __init__(self, client: AppSignalClient, name: str = SERVER_NAME):
        self.client = client
        self.server: Server = Server(name, version=__version__)
        self._register_handlers()

    @classmethod
    def from_settings(cls, settings: Settings) -> AppSignalMCPServer:
        return cls(AppSignalClient(settings.api_token, settings.app_id))

    def _register_handlers(self) -> None:
        server = self.server

        @server.list_tools()
        async def list_tools() -> list[Tool]:
            return tools.list_tools()

        # The tool argument models do the validation
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
            return await tools.call_tool(self.client, name, arguments)

        @server.list_resources()
        async def list_resources() -> list[Resource]:
            return resources.list_resources()

        @server.list_resource_templates()
        async def list_resource_templates() -> list[ResourceTemplate]:
            return resources.list_resource_templates()

        @server.read_resource()
        async def read_resource(uri: Any) -> list[ReadResourceContents]:
            return await resources.read_resource(self.client, uri)

        @server.list_prompts()
        async def list_prompts() -> list[Prompt]:
            return prompts.list_prompts()

        @server.get_prompt()
        async def get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
            return prompts.get_prompt(name, arguments)

    async def connect(self, read_stream: Any, write_stream: Any) -> None:
        """Serve MCP requests on a stream pair until the peer disconnects."""
        logger.info("%s connected", self.server.name)
        await self.server.run(read_stream, write_stream, self.server.create_initialization_options())

    async def close(self) -> None:
        """Release the client's HTTP connections."""
        await self.client.aclose()
