from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

from livemap.geo import EARTH_RADIUS_M, format_distance, haversine, nearest_pin
from livemap.models.pin import AlertPin

_M_PER_DEG = EARTH_RADIUS_M * math.pi / 180


def _pin(pin_id: str, latitude: float, longitude: float) -> AlertPin:
    return AlertPin(
        pin_id=pin_id,
        raised_by="u1",
        raised_by_name="User u1",
        latitude=latitude,
        longitude=longitude,
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


def test_haversine_zero_for_same_point() -> None:
    assert haversine(52.52, 13.405, 52.52, 13.405) == 0.0


def test_haversine_along_meridian_matches_arc_length() -> None:
    assert haversine(40.0, -73.0, 40.0 + 99 / _M_PER_DEG, -73.0) == pytest.approx(99.0, abs=1e-6)


def test_haversine_is_symmetric() -> None:
    a = haversine(40.0, -73.0, 51.5, -0.12)
    b = haversine(51.5, -0.12, 40.0, -73.0)
    assert a == pytest.approx(b)


def test_haversine_one_degree_on_equator() -> None:
    assert haversine(0.0, 0.0, 0.0, 1.0) == pytest.approx(111_194.93, abs=0.01)


def test_haversine_longitude_shrinks_with_latitude() -> None:
    at_equator = haversine(0.0, 0.0, 0.0, 0.001)
    at_sixty = haversine(60.0, 0.0, 60.0, 0.001)
    assert at_sixty == pytest.approx(at_equator / 2, rel=1e-4)


def test_nearest_pin_empty() -> None:
    assert nearest_pin([], 40.0, -73.0) is None


def test_nearest_pin_picks_closest() -> None:
    far = _pin("far", 40.01, -73.0)
    near = _pin("near", 40.001, -73.0)
    result = nearest_pin([far, near], 40.0, -73.0)
    assert result is not None
    assert result.pin.pin_id == "near"
    assert result.distance == pytest.approx(0.001 * _M_PER_DEG)


def test_nearest_pin_tie_keeps_first() -> None:
    first = _pin("first", 40.001, -73.0)
    second = _pin("second", 39.999, -73.0)
    result = nearest_pin([first, second], 40.0, -73.0, distance=lambda *_: 5.0)
    assert result is not None
    assert result.pin.pin_id == "first"


@pytest.mark.parametrize(
    ("meters", "expected"),
    [
        (0.0, "0 m"),
        (12.5, "13 m"),
        (999.4, "999 m"),
        (1000.0, "1.0 km"),
        (12_345.0, "12.3 km"),
    ],
)
def test_format_distance(meters: float, expected: str) -> None:
    assert format_distance(meters) == expected
