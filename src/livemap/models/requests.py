"""Pydantic request models for the HTTP transport.

These models provide a consistent "validate -> normalize -> execute" flow.
The store trusts its inputs; coordinate sanitization happens here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


class PointRequest(_RequestModel):
    """A point on the map."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class PositionUpdateRequest(PointRequest):
    name: str | None = None

    @field_validator("name")
    @classmethod
    def _blank_name_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class PlacePinRequest(PositionUpdateRequest):
    subject_id: str

    @field_validator("subject_id")
    @classmethod
    def _subject_non_empty(cls, value: str) -> str:
        subject_id = value.strip()
        if not subject_id:
            raise ValueError("subjectId must be non-empty")
        return subject_id


class PointQuery(PointRequest):
    """A point read from a query string; unrelated parameters are ignored."""

    model_config = ConfigDict(extra="ignore")
