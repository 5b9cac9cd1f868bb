"""MCP resources addressed by ``appsignal://`` URIs."""

from __future__ import annotations

import json
import logging
import re
from typing import Any
from urllib.parse import unquote

from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import Resource, ResourceTemplate

from .client import AppSignalClient
from .errors import AppSignalError

logger = logging.getLogger(__name__)

INCIDENTS_URI = "appsignal://incidents"
INCIDENT_URI_TEMPLATE = "appsignal://incident/{incidentNumber}"
# RFC 6570 path expansion: the sample id segment is optional
INCIDENT_SAMPLE_URI_TEMPLATE = "appsignal://incident/{incidentNumber}/sample{/sampleId}"

_INCIDENT_RE = re.compile(r"^appsignal://incident/(?P<number>[^/]+)/?$")
_INCIDENT_SAMPLE_RE = re.compile(
    r"^appsignal://incident/(?P<number>[^/]+)/sample(?:/(?P<sample_id>[^/]*))?/?$"
)

JSON_MIME_TYPE = "application/json"


def list_resources() -> list[Resource]:
    return [
        Resource(
            uri=INCIDENTS_URI,
            name="incidents",
            description="Most recent AppSignal exception incidents",
            mimeType=JSON_MIME_TYPE,
        ),
    ]


def list_resource_templates() -> list[ResourceTemplate]:
    return [
        ResourceTemplate(
            uriTemplate=INCIDENT_URI_TEMPLATE,
            name="incident",
            description="An AppSignal exception incident",
            mimeType=JSON_MIME_TYPE,
        ),
        ResourceTemplate(
            uriTemplate=INCIDENT_SAMPLE_URI_TEMPLATE,
            name="incident-sample",
            description="A sample of an AppSignal incident; the latest when no id is given",
            mimeType=JSON_MIME_TYPE,
        ),
    ]


async def read_resource(client: AppSignalClient, uri: Any) -> list[ReadResourceContents]:
    """Resolve a resource URI against AppSignal.

    Fetch failures are rendered as plain text content, since resource
    results carry no error flag.

    Raises:
        ValueError: If the URI does not address a known resource
    """
    uri = str(uri).rstrip("/")

    if uri == INCIDENTS_URI:
        return await _render("Error fetching incidents", _incidents(client))

    match = _INCIDENT_SAMPLE_RE.match(uri)
    if match:
        return await _render(
            "Error fetching incident sample",
            _incident_sample(client, match["number"], match["sample_id"]),
        )

    match = _INCIDENT_RE.match(uri)
    if match:
        return await _render("Error fetching incident", _incident(client, match["number"]))

    raise ValueError(f"Unknown resource: {uri}")


async def _incident(client: AppSignalClient, number: str) -> dict[str, Any]:
    incident = await client.get_incident(parse_incident_number(number))
    return incident.to_dict()


async def _incident_sample(
    client: AppSignalClient, number: str, sample_id: str | None
) -> dict[str, Any]:
    sample = await client.get_incident_sample(
        parse_incident_number(number), first_segment_value(sample_id)
    )
    return sample.to_dict()


async def _incidents(client: AppSignalClient) -> list[dict[str, Any]]:
    return [incident.to_dict() for incident in await client.list_incidents()]


async def _render(error_prefix: str, fetch: Any) -> list[ReadResourceContents]:
    try:
        result = await fetch
    except (AppSignalError, ValueError) as e:
        logger.warning("%s: %s", error_prefix, e)
        return [ReadResourceContents(content=f"{error_prefix}: {e}", mime_type="text/plain")]
    return [ReadResourceContents(content=json.dumps(result, indent=2), mime_type=JSON_MIME_TYPE)]


def parse_incident_number(raw: str) -> int:
    value = unquote(raw)
    if not value.isdigit():
        raise ValueError(f"invalid incident number: {value!r}")
    return int(value)


def first_segment_value(raw: str | None) -> str | None:
    """Return the first value of a possibly comma-separated URI segment."""
    if not raw:
        return None
    first = unquote(raw.split(",")[0])
    return first or None
