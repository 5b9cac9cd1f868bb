"""Exception hierarchy for the AppSignal client and MCP server."""

from __future__ import annotations

import json
from typing import Any


class AppSignalError(Exception):
    """Base class for every error raised by appsignal_mcp."""


class ConfigurationError(AppSignalError):
    """Required credentials or settings are missing."""


class TransportError(AppSignalError):
    """The HTTP request to AppSignal did not complete."""


class AppSignalAPIError(TransportError):
    """Network, TLS or HTTP status failure talking to the GraphQL endpoint.

    The message keeps the underlying transport error text unmodified
    after the ``API Error:`` prefix.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(f"API Error: {message}")
        self.detail = message
        self.status_code = status_code


class RemoteQueryError(AppSignalError):
    """AppSignal answered with a GraphQL ``errors`` array."""

    def __init__(self, errors: list[Any]):
        self.errors = errors
        super().__init__(f"GraphQL Error: {json.dumps(errors)}")


class SchemaValidationError(AppSignalError):
    """A response did not match the expected shape."""

    def __init__(self, entity: str, errors: list[dict[str, Any]]):
        self.entity = entity
        self.errors = errors
        details = "; ".join(_format_error(e) for e in errors)
        super().__init__(f"Schema validation failed for {entity}: {details}")


class NotFoundError(AppSignalError):
    """The requested record does not exist in the application."""


class IncidentNotFoundError(NotFoundError):
    def __init__(self, incident_number: int):
        self.incident_number = incident_number
        super().__init__(f"Incident #{incident_number} not found")


class SampleNotFoundError(NotFoundError):
    def __init__(self, incident_number: int, sample_id: str | None = None):
        self.incident_number = incident_number
        self.sample_id = sample_id
        if sample_id:
            message = f"Sample {sample_id} not found for incident #{incident_number}"
        else:
            message = f"No sample available for incident #{incident_number}"
        super().__init__(message)


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location or '<root>'}: {error.get('msg', 'invalid value')}"
