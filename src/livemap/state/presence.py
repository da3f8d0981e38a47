"""Presence registry: who is where, pruned by last-update age."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from livemap.config import DEFAULT_STALE_THRESHOLD
from livemap.models.position import PositionRecord, default_display_name
from livemap.models.results import OperationResult
from livemap.state.policy import is_expired

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PresenceRegistry:
    """Keyed store of the latest position per subject.

    Stale records are evicted on every read; there is no background timer
    here. All access goes through ``lock``, which :class:`LiveMapStore`
    also takes when it needs a snapshot consistent with the pin registry.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        stale_threshold: timedelta = timedelta(seconds=DEFAULT_STALE_THRESHOLD),
    ) -> None:
        self._clock = clock
        self._stale_threshold = stale_threshold
        self._records: dict[str, PositionRecord] = {}
        self.lock = threading.RLock()

    def _evict(self, now: datetime) -> int:
        stale = [
            subject_id
            for subject_id, record in self._records.items()
            if is_expired(now, record.last_updated, self._stale_threshold)
        ]
        for subject_id in stale:
            del self._records[subject_id]
        if stale:
            _logger.debug("Evicted %d stale position(s)", len(stale))
        return len(stale)

    def upsert(
        self,
        subject_id: str,
        latitude: float,
        longitude: float,
        display_name: str | None = None,
    ) -> OperationResult:
        """Replace the subject's record with a freshly stamped one."""
        with self.lock:
            now = self._clock()
            self._evict(now)
            self._records[subject_id] = PositionRecord(
                subject_id=subject_id,
                display_name=display_name or default_display_name(subject_id),
                latitude=latitude,
                longitude=longitude,
                last_updated=now,
            )
        _logger.debug("Position updated subject=%s", subject_id)
        return OperationResult(success=True)

    def remove(self, subject_id: str) -> OperationResult:
        with self.lock:
            removed = self._records.pop(subject_id, None)
        if removed is not None:
            _logger.debug("Position removed subject=%s", subject_id)
        return OperationResult(success=True)

    def snapshot(self, now: datetime | None = None) -> list[PositionRecord]:
        """Evict stale records, then return the live ones in no particular order."""
        with self.lock:
            self._evict(self._clock() if now is None else now)
            return list(self._records.values())

    def count(self, now: datetime | None = None) -> int:
        with self.lock:
            self._evict(self._clock() if now is None else now)
            return len(self._records)

    def sweep(self, now: datetime | None = None) -> int:
        """Evict stale records and return how many were dropped."""
        with self.lock:
            return self._evict(self._clock() if now is None else now)
