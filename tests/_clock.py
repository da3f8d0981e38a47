from __future__ import annotations

from datetime import UTC, datetime, timedelta

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FrozenClock:
    """Manually advanced clock; counts how often it is read."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start
        self.reads = 0

    def __call__(self) -> datetime:
        self.reads += 1
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)

    def set(self, **kwargs: float) -> None:
        self.now = T0 + timedelta(**kwargs)
