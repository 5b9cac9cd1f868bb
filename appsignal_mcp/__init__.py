"""AppSignal incidents for AI assistants over the Model Context Protocol.

Usage:
    from appsignal_mcp import AppSignalClient, AppSignalMCPServer

    client = AppSignalClient(api_token, app_id)
    incident = await client.get_incident(5321)

    server = AppSignalMCPServer(client)
"""

__version__ = "1.0.0"

from .client import AppSignalClient
from .errors import (
    AppSignalAPIError,
    AppSignalError,
    ConfigurationError,
    IncidentNotFoundError,
    NotFoundError,
    RemoteQueryError,
    SampleNotFoundError,
    SchemaValidationError,
    TransportError,
)
from .models import Incident, IncidentState, Sample
from .server import AppSignalMCPServer

__all__ = [
    "__version__",
    # Client
    "AppSignalClient",
    "Incident",
    "IncidentState",
    "Sample",
    # Server
    "AppSignalMCPServer",
    # Errors
    "AppSignalError",
    "AppSignalAPIError",
    "ConfigurationError",
    "IncidentNotFoundError",
    "NotFoundError",
    "RemoteQueryError",
    "SampleNotFoundError",
    "SchemaValidationError",
    "TransportError",
]
