"""Alert pin model."""

from __future__ import annotations

from datetime import datetime

from livemap.models._base import LiveMapBaseModel


def make_pin_id(raised_by: str, created_at: datetime) -> str:
    """Derive a pin id from its creator and creation instant (epoch ms)."""
    return f"{raised_by}-{int(created_at.timestamp() * 1000)}"


class AlertPin(LiveMapBaseModel):
    """A time-limited alert raised by a subject at a point.

    ``raised_by_name`` is captured at creation and never refreshed.
    """

    pin_id: str
    raised_by: str
    raised_by_name: str
    latitude: float
    longitude: float
    created_at: datetime

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
