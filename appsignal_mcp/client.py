"""Async client for the AppSignal GraphQL API.

Each operation sends exactly one POST and returns validated models.
Failures are normalized into the exceptions in ``appsignal_mcp.errors``;
nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import (
    AppSignalAPIError,
    ConfigurationError,
    IncidentNotFoundError,
    RemoteQueryError,
    SampleNotFoundError,
    SchemaValidationError,
)
from .models import (
    DecodeFailure,
    DecodeResult,
    Incident,
    IncidentState,
    Sample,
    decode,
    decode_many,
)
from .queries import EXCEPTION_INCIDENTS_QUERY, INCIDENT_QUERY, INCIDENT_SAMPLE_QUERY

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://appsignal.com/graphql"
DEFAULT_LIST_LIMIT = 25


class AppSignalClient:
    """Read-only client for incidents and samples of one AppSignal app.

    Example:
        async with AppSignalClient(token, app_id) as client:
            incident = await client.get_incident(5321)
            print(incident.exception_name)
    """

    def __init__(
        self,
        api_token: str,
        app_id: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            api_token: AppSignal personal API token, sent as ``?token=``
            app_id: Identifier of the AppSignal application to query
            base_url: GraphQL endpoint URL
            http_client: Shared ``httpx.AsyncClient``; when omitted the
                client creates one and closes it in ``aclose()``

        Raises:
            ConfigurationError: If the token or app id is empty
        """
        if not api_token:
            raise ConfigurationError("AppSignal API token is required")
        if not app_id:
            raise ConfigurationError("AppSignal app id is required")

        self.api_token = api_token
        self.app_id = app_id
        self.base_url = base_url
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient()

    async def __aenter__(self) -> AppSignalClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_incident(self, incident_number: int) -> Incident:
        """Fetch an exception incident by its number.

        Raises:
            IncidentNotFoundError: If the app has no exception incident
                with that number
        """
        _require_positive("incident_number", incident_number)

        app = await self._query_app(
            INCIDENT_QUERY,
            {"appId": self.app_id, "incidentNumber": incident_number},
        )
        incident = _incident_object(app, incident_number)
        return _unwrap(decode(Incident, incident))

    async def get_incident_sample(
        self, incident_number: int, sample_id: str | None = None
    ) -> Sample:
        """Fetch a sample of an incident.

        When ``sample_id`` is None AppSignal picks the sample, usually the
        most recent one.
        """
        _require_positive("incident_number", incident_number)

        app = await self._query_app(
            INCIDENT_SAMPLE_QUERY,
            {
                "appId": self.app_id,
                "incidentNumber": incident_number,
                "sampleId": sample_id,
            },
        )
        sample = _incident_object(app, incident_number).get("sample")
        if sample is None:
            raise SampleNotFoundError(incident_number, sample_id)

        return _unwrap(decode(Sample, sample))

    async def list_incidents(
        self, limit: int = DEFAULT_LIST_LIMIT, state: str | None = None
    ) -> list[Incident]:
        """List exception incidents in the order AppSignal returns them.

        Args:
            limit: Maximum number of incidents
            state: Optional filter, one of ``open``, ``closed``, ``ignored``
        """
        _require_positive("limit", limit)
        if state is not None:
            state = IncidentState(state).value

        app = await self._query_app(
            EXCEPTION_INCIDENTS_QUERY,
            {"appId": self.app_id, "limit": limit, "state": state},
        )
        return _unwrap(decode_many(Incident, app.get("exceptionIncidents")))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _query_app(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        data = await self.execute_query(query, variables)
        return _require_object("app", data.get("app"))

    async def execute_query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            AppSignalAPIError: On network failures, non-2xx statuses or a
                body that is not JSON
            RemoteQueryError: If the response carries an ``errors`` array
        """
        logger.debug("POST %s variables=%s", self.base_url, variables)

        try:
            response = await self.http_client.post(
                self.base_url,
                params={"token": self.api_token},
                json={"query": query, "variables": variables},
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # str(e) embeds the request URL, which carries the token
            status = e.response.status_code
            logger.warning("AppSignal returned HTTP %s", status)
            raise AppSignalAPIError(
                f"HTTP {status} {e.response.reason_phrase}".rstrip(), status_code=status
            ) from e
        except httpx.HTTPError as e:
            logger.warning("AppSignal request failed: %s", e)
            raise AppSignalAPIError(str(e)) from e

        try:
            body = response.json()
        except ValueError as e:
            raise AppSignalAPIError(f"invalid JSON in response: {e}") from e
        if not isinstance(body, dict):
            raise AppSignalAPIError("response body is not a JSON object")

        if body.get("errors") is not None:
            logger.warning("AppSignal reported GraphQL errors: %s", body["errors"])
            raise RemoteQueryError(body["errors"])

        data = body.get("data")
        if data is None:
            return {}
        return _require_object("data", data)


def _unwrap(result: DecodeResult[Any]) -> Any:
    if isinstance(result, DecodeFailure):
        raise SchemaValidationError(result.entity, result.errors)
    return result.value


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def _require_object(entity: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaValidationError(
            entity, [{"loc": (entity,), "msg": f"expected an object, got {type(value).__name__}"}]
        )
    return value


def _incident_object(app: dict[str, Any], incident_number: int) -> dict[str, Any]:
    incident = app.get("incident")
    # A non-exception incident matches no fragment and comes back as {}
    if incident is None or incident == {}:
        raise IncidentNotFoundError(incident_number)
    return _require_object("incident", incident)
