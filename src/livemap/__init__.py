"""livemap - In-memory store and HTTP service for live positions and alert pins."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("livemap")
except PackageNotFoundError:
    __version__ = "0+local"
from livemap.config import LiveMapConfig
from livemap.exceptions import LiveMapConfigError, LiveMapError, LiveMapRequestError
from livemap.geo import NearestPin, format_distance, haversine, nearest_pin
from livemap.models import (
    AdmissionError,
    AlertPin,
    MapSnapshot,
    OperationResult,
    PlacementResult,
    PositionRecord,
)
from livemap.state import AlertPinRegistry, LiveMapStore, PresenceRegistry

__all__ = [
    "__version__",
    "AdmissionError",
    "AlertPin",
    "AlertPinRegistry",
    "LiveMapConfig",
    "LiveMapConfigError",
    "LiveMapError",
    "LiveMapRequestError",
    "LiveMapStore",
    "MapSnapshot",
    "NearestPin",
    "OperationResult",
    "PlacementResult",
    "PositionRecord",
    "PresenceRegistry",
    "format_distance",
    "haversine",
    "nearest_pin",
]
