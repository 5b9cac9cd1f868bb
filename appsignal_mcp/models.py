"""Pydantic models for AppSignal incidents and samples.

Field names mirror the GraphQL response (camelCase aliases), and
``to_dict()`` renders a model back to exactly the keys AppSignal sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)


class IncidentState(str, Enum):
    """States accepted by the ``listIncidents`` filter."""

    OPEN = "open"
    CLOSED = "closed"
    IGNORED = "ignored"


# States AppSignal may report on an incident; "wip" is never a filter value.
KNOWN_INCIDENT_STATES = frozenset({s.value for s in IncidentState} | {"wip"})


class AppSignalModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class Incident(AppSignalModel):
    id: StrictStr
    number: StrictInt
    count: StrictInt
    last_occurred_at: StrictStr = Field(alias="lastOccurredAt")
    action_names: list[StrictStr] = Field(alias="actionNames")
    exception_name: StrictStr = Field(alias="exceptionName")
    state: StrictStr
    namespace: StrictStr
    first_backtrace_line: StrictStr | None = Field(default=None, alias="firstBacktraceLine")
    error_grouping_strategy: StrictStr | None = Field(default=None, alias="errorGroupingStrategy")
    severity: StrictStr | None = None

    @field_validator("state")
    @classmethod
    def check_state(cls, value: str) -> str:
        if value.lower() not in KNOWN_INCIDENT_STATES:
            raise ValueError(
                f"unknown incident state {value!r}, expected one of "
                f"{', '.join(sorted(KNOWN_INCIDENT_STATES))}"
            )
        return value


class OverviewEntry(AppSignalModel):
    key: StrictStr
    value: StrictStr


class CodeContext(AppSignalModel):
    line: StrictInt | None = None
    source: StrictStr | None = None


class FrameError(AppSignalModel):
    class_: StrictStr | None = Field(default=None, alias="class")
    message: StrictStr | None = None


class BacktraceFrame(AppSignalModel):
    original: StrictStr | None = None
    line: StrictInt | None = None
    column: StrictInt | None = None
    path: StrictStr | None = None
    method: StrictStr | None = None
    url: StrictStr | None = None
    type: StrictStr | None = None
    code: CodeContext | None = None
    error: FrameError | None = None


class ExceptionDetail(AppSignalModel):
    name: StrictStr
    message: StrictStr
    backtrace: list[BacktraceFrame]


class Sample(AppSignalModel):
    id: StrictStr
    app_id: StrictStr = Field(alias="appId")
    time: StrictStr
    revision: StrictStr | None = None
    action: StrictStr
    namespace: StrictStr
    overview: list[OverviewEntry]
    exception: ExceptionDetail


# ---------------------------------------------------------------------------
# Fallible decoding
# ---------------------------------------------------------------------------

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=AppSignalModel)


@dataclass(frozen=True)
class Decoded(Generic[T]):
    """Successfully decoded payload."""

    value: T


@dataclass(frozen=True)
class DecodeFailure:
    """Payload that did not match the model's structure."""

    entity: str
    errors: list[dict[str, Any]]


DecodeResult = Union[Decoded[T], DecodeFailure]


def decode(model: type[ModelT], payload: Any) -> DecodeResult[ModelT]:
    """Validate a single response object against ``model``."""
    try:
        return Decoded(model.model_validate(payload))
    except ValidationError as e:
        return DecodeFailure(model.__name__, e.errors(include_url=False))


def decode_many(model: type[ModelT], payload: Any) -> Decoded[list[ModelT]] | DecodeFailure:
    """Validate a list of response objects, keeping the service's order."""
    try:
        return Decoded(TypeAdapter(list[model]).validate_python(payload))
    except ValidationError as e:
        return DecodeFailure(f"list[{model.__name__}]", e.errors(include_url=False))
