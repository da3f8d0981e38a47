"""Data models for livemap records, results and requests."""

from livemap.models._base import LiveMapBaseModel
from livemap.models.pin import AlertPin, make_pin_id
from livemap.models.position import PositionRecord, default_display_name
from livemap.models.requests import PlacePinRequest, PointQuery, PointRequest, PositionUpdateRequest
from livemap.models.results import AdmissionError, MapSnapshot, OperationResult, PlacementResult

__all__ = [
    "AdmissionError",
    "AlertPin",
    "LiveMapBaseModel",
    "MapSnapshot",
    "OperationResult",
    "PlacePinRequest",
    "PlacementResult",
    "PointQuery",
    "PointRequest",
    "PositionRecord",
    "PositionUpdateRequest",
    "default_display_name",
    "make_pin_id",
]
