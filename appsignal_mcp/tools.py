"""MCP tool definitions and handlers.

Every handler is a plain coroutine that receives the shared
``AppSignalClient`` and a validated argument model. Failures are returned
as error-flagged results instead of being raised to the transport.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal

from mcp.types import CallToolResult, TextContent, Tool
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from .client import DEFAULT_LIST_LIMIT, AppSignalClient
from .errors import AppSignalError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument models
# ---------------------------------------------------------------------------


class ToolArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class GetIncidentArgs(ToolArguments):
    incident_number: StrictInt = Field(
        gt=0, alias="incidentNumber", description="AppSignal incident number, e.g. 5321"
    )


class GetIncidentSampleArgs(ToolArguments):
    incident_number: StrictInt = Field(
        gt=0, alias="incidentNumber", description="AppSignal incident number"
    )
    sample_id: StrictStr | None = Field(
        default=None,
        alias="sampleId",
        description="Sample id; the most recent sample is used when omitted",
    )


class ListIncidentsArgs(ToolArguments):
    limit: StrictInt = Field(
        default=DEFAULT_LIST_LIMIT, gt=0, description="Maximum number of incidents to return"
    )
    state: Literal["open", "closed", "ignored"] | None = Field(
        default=None, description="Only return incidents in this state"
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def get_incident(client: AppSignalClient, args: GetIncidentArgs) -> dict[str, Any]:
    incident = await client.get_incident(args.incident_number)
    return incident.to_dict()


async def get_incident_sample(
    client: AppSignalClient, args: GetIncidentSampleArgs
) -> dict[str, Any]:
    sample = await client.get_incident_sample(args.incident_number, args.sample_id)
    return sample.to_dict()


async def list_incidents(
    client: AppSignalClient, args: ListIncidentsArgs
) -> list[dict[str, Any]]:
    incidents = await client.list_incidents(args.limit, args.state)
    return [incident.to_dict() for incident in incidents]


@dataclass(frozen=True)
class ToolSpec:
    """A tool name bound to its argument model and handler."""

    name: str
    description: str
    arguments: type[ToolArguments]
    handler: Callable[[AppSignalClient, Any], Awaitable[Any]]
    error_prefix: str

    def to_tool(self) -> Tool:
        schema = self.arguments.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return Tool(name=self.name, description=self.description, inputSchema=schema)


TOOLS: dict[str, ToolSpec] = {
    entry.name: entry
    for entry in (
        ToolSpec(
            name="getIncident",
            description="Fetch an AppSignal exception incident by its number.",
            arguments=GetIncidentArgs,
            handler=get_incident,
            error_prefix="Error fetching incident",
        ),
        ToolSpec(
            name="getIncidentSample",
            description=(
                "Fetch a sample of an AppSignal incident, including the exception "
                "message and backtrace."
            ),
            arguments=GetIncidentSampleArgs,
            handler=get_incident_sample,
            error_prefix="Error fetching incident sample",
        ),
        ToolSpec(
            name="listIncidents",
            description="List AppSignal exception incidents, optionally filtered by state.",
            arguments=ListIncidentsArgs,
            handler=list_incidents,
            error_prefix="Error listing incidents",
        ),
    )
}


def list_tools() -> list[Tool]:
    return [entry.to_tool() for entry in TOOLS.values()]


async def call_tool(
    client: AppSignalClient, name: str, arguments: dict[str, Any] | None
) -> CallToolResult:
    """Validate arguments, run the named tool and render its result."""
    entry = TOOLS.get(name)
    if entry is None:
        return error_result(f"Unknown tool: {name}")

    try:
        args = entry.arguments.model_validate(arguments or {})
        result = await entry.handler(client, args)
    except (AppSignalError, ValueError) as e:
        logger.warning("%s failed: %s", name, e)
        return error_result(f"{entry.error_prefix}: {e}")

    return CallToolResult(content=[TextContent(type="text", text=json.dumps(result, indent=2))])


def error_result(message: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)
