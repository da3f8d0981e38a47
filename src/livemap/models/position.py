"""Position record model."""

from __future__ import annotations

from datetime import datetime

from livemap.models._base import LiveMapBaseModel


def default_display_name(subject_id: str) -> str:
    """Short label used when a subject reports no name."""
    return f"User {subject_id[:4]}"


class PositionRecord(LiveMapBaseModel):
    """The last reported position of one subject.

    Parameters
    ----------
    subject_id : str
        Opaque id, stable for one reporting session.
    display_name : str
        Free-text label.
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    last_updated : datetime
        Time of the write that produced this record.
    """

    subject_id: str
    display_name: str
    latitude: float
    longitude: float
    last_updated: datetime

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
