"""In-memory store facade for positions and alert pins.

This is the only component allowed to touch the registries. Callers get
frozen records and fresh lists, never references into the keyed stores.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from livemap.config import LiveMapConfig
from livemap.geo import DistanceFn, NearestPin, haversine, nearest_pin
from livemap.models.position import default_display_name
from livemap.models.results import MapSnapshot, OperationResult, PlacementResult
from livemap.state.pins import AlertPinRegistry
from livemap.state.presence import PresenceRegistry

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LiveMapStore:
    """Single owned store for one process.

    Construct it once and pass it to the transport layer::

        store = LiveMapStore(LiveMapConfig.from_env())
        store.update_position("u1", 40.0, -73.0, "Ada")
        snapshot = store.read_snapshot()

    Every operation is synchronous and CPU-bound, and safe to call from
    any number of threads.
    """

    def __init__(
        self,
        config: LiveMapConfig | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
        distance: DistanceFn = haversine,
    ) -> None:
        self._config = config or LiveMapConfig()
        self._clock = clock
        self._distance = distance
        self._presence = PresenceRegistry(
            clock=clock,
            stale_threshold=self._config.stale_after,
        )
        self._pins = AlertPinRegistry(
            clock=clock,
            pin_threshold=self._config.pin_ttl,
            exclusion_radius=self._config.exclusion_radius,
            distance=distance,
        )

    @property
    def config(self) -> LiveMapConfig:
        return self._config

    def update_position(
        self,
        subject_id: str,
        latitude: float,
        longitude: float,
        name: str | None = None,
    ) -> OperationResult:
        return self._presence.upsert(subject_id, latitude, longitude, name)

    def remove_position(self, subject_id: str) -> OperationResult:
        return self._presence.remove(subject_id)

    def place_pin(
        self,
        subject_id: str,
        name: str | None,
        latitude: float,
        longitude: float,
    ) -> PlacementResult:
        """Place an alert pin for *subject_id*.

        A rejection is returned, not raised: ``success`` is ``False`` and
        ``error`` carries the message shown to the user.
        """
        return self._pins.try_place(subject_id, name or default_display_name(subject_id), latitude, longitude)

    def read_snapshot(self) -> MapSnapshot:
        """Return live positions and pins as of one clock reading.

        Both registry locks are held together (presence first, then pins)
        so no write lands between the two halves.
        """
        with self._presence.lock, self._pins.lock:
            now = self._clock()
            return MapSnapshot(
                positions=self._presence.snapshot(now),
                pins=self._pins.snapshot(now),
            )

    def position_count(self) -> int:
        return self._presence.count()

    def nearest_pin(self, latitude: float, longitude: float) -> NearestPin | None:
        """Closest live pin to a point, measured with the store's distance function."""
        return nearest_pin(self._pins.snapshot(), latitude, longitude, distance=self._distance)

    def sweep(self) -> tuple[int, int]:
        """Evict stale positions and expired pins.

        Returns
        -------
        tuple[int, int]
            Number of positions and pins dropped.
        """
        with self._presence.lock, self._pins.lock:
            now = self._clock()
            dropped = (self._presence.sweep(now), self._pins.sweep(now))
        if any(dropped):
            _logger.debug("Sweep dropped positions=%d pins=%d", *dropped)
        return dropped
