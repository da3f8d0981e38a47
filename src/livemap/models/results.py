"""Structured operation results returned by the store."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from livemap.models._base import LiveMapBaseModel
from livemap.models.pin import AlertPin
from livemap.models.position import PositionRecord


class AdmissionError(StrEnum):
    """Why a pin placement was refused."""

    TOO_CLOSE = "too_close"


class OperationResult(LiveMapBaseModel):
    """Outcome of a store write; ``error`` is set only on failure."""

    success: bool
    error: str | None = None


class PlacementResult(OperationResult):
    """Outcome of a pin placement.

    On success ``pin`` is the created pin. On rejection ``reason``
    names the admission rule and ``error`` is a human-readable message.
    """

    reason: AdmissionError | None = None
    pin: AlertPin | None = None


class MapSnapshot(LiveMapBaseModel):
    """Live positions and pins observed at a single instant."""

    positions: list[PositionRecord] = Field(default_factory=list)
    pins: list[AlertPin] = Field(default_factory=list)
