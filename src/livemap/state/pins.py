"""Alert pin registry: admission under a per-creator exclusion radius."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from livemap.config import DEFAULT_EXCLUSION_RADIUS, DEFAULT_PIN_THRESHOLD
from livemap.geo import DistanceFn, haversine
from livemap.models.pin import AlertPin, make_pin_id
from livemap.models.results import AdmissionError, PlacementResult
from livemap.state.policy import is_expired, is_too_close

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def too_close_message(radius: float) -> str:
    return f"Cannot place pin within {radius:g} meters of your existing pins"


class AlertPinRegistry:
    """Keyed store of live alert pins.

    A creator may not hold two live pins closer than ``exclusion_radius``
    meters; other creators are unaffected. Pins expire ``pin_threshold``
    after creation and cannot be deleted otherwise.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        pin_threshold: timedelta = timedelta(seconds=DEFAULT_PIN_THRESHOLD),
        exclusion_radius: float = DEFAULT_EXCLUSION_RADIUS,
        distance: DistanceFn = haversine,
    ) -> None:
        self._clock = clock
        self._pin_threshold = pin_threshold
        self._exclusion_radius = exclusion_radius
        self._distance = distance
        self._pins: dict[str, AlertPin] = {}
        self.lock = threading.RLock()

    @property
    def exclusion_radius(self) -> float:
        return self._exclusion_radius

    def _evict(self, now: datetime) -> int:
        expired = [
            pin_id for pin_id, pin in self._pins.items() if is_expired(now, pin.created_at, self._pin_threshold)
        ]
        for pin_id in expired:
            del self._pins[pin_id]
        if expired:
            _logger.debug("Evicted %d expired pin(s)", len(expired))
        return len(expired)

    def _conflicts(self, raised_by: str, latitude: float, longitude: float) -> bool:
        for pin in self._pins.values():
            if pin.raised_by != raised_by:
                continue
            meters = self._distance(pin.latitude, pin.longitude, latitude, longitude)
            if is_too_close(meters, self._exclusion_radius):
                return True
        return False

    def _fresh_id(self, raised_by: str, now: datetime) -> str:
        base = make_pin_id(raised_by, now)
        pin_id = base
        suffix = 0
        while pin_id in self._pins:
            suffix += 1
            pin_id = f"{base}-{suffix}"
        return pin_id

    def try_place(
        self,
        raised_by: str,
        raised_by_name: str,
        latitude: float,
        longitude: float,
    ) -> PlacementResult:
        """Create a pin unless the creator already has a live one nearby.

        Eviction, the exclusion check and the insert run under one lock
        hold, so concurrent placements by the same creator cannot both
        pass the check. Pins evicted in this call never block admission.
        """
        with self.lock:
            now = self._clock()
            self._evict(now)
            if self._conflicts(raised_by, latitude, longitude):
                _logger.debug("Pin rejected (too close) raised_by=%s", raised_by)
                return PlacementResult(
                    success=False,
                    error=too_close_message(self._exclusion_radius),
                    reason=AdmissionError.TOO_CLOSE,
                )
            pin = AlertPin(
                pin_id=self._fresh_id(raised_by, now),
                raised_by=raised_by,
                raised_by_name=raised_by_name,
                latitude=latitude,
                longitude=longitude,
                created_at=now,
            )
            self._pins[pin.pin_id] = pin

        _logger.info("Pin placed pin_id=%s raised_by=%s", pin.pin_id, raised_by)
        return PlacementResult(success=True, pin=pin)

    def snapshot(self, now: datetime | None = None) -> list[AlertPin]:
        """Evict expired pins, then return the live ones in no particular order."""
        with self.lock:
            self._evict(self._clock() if now is None else now)
            return list(self._pins.values())

    def sweep(self, now: datetime | None = None) -> int:
        """Evict expired pins and return how many were dropped."""
        with self.lock:
            return self._evict(self._clock() if now is None else now)
