"""Great-circle helpers shared by pin admission and nearest-pin queries."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import NamedTuple

from livemap.models.pin import AlertPin

EARTH_RADIUS_M = 6371000.0

DistanceFn = Callable[[float, float, float, float], float]
"""``(lat1, lon1, lat2, lon2) -> meters``."""


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute the great-circle distance between two points on the Earth.

    Parameters
    ----------
    lat1, lon1
        Point A in decimal degrees.
    lat2, lon2
        Point B in decimal degrees.

    Returns
    -------
    float
        Distance between A and B in meters, on a sphere of radius
        :data:`EARTH_RADIUS_M`.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


class NearestPin(NamedTuple):
    pin: AlertPin
    distance: float


def nearest_pin(
    pins: Iterable[AlertPin],
    latitude: float,
    longitude: float,
    *,
    distance: DistanceFn = haversine,
) -> NearestPin | None:
    """Return the pin closest to a point, or ``None`` when there are no pins.

    Ties keep the first pin encountered.
    """
    best: NearestPin | None = None
    for pin in pins:
        meters = distance(latitude, longitude, pin.latitude, pin.longitude)
        if best is None or meters < best.distance:
            best = NearestPin(pin, meters)
    return best


def format_distance(meters: float) -> str:
    """Human-readable distance: whole meters below 1 km, else one-decimal km."""
    if meters < 1000:
        return f"{math.floor(meters + 0.5)} m"
    return f"{meters / 1000:.1f} km"
