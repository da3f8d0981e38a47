"""Custom exception hierarchy for livemap.

Pin admission failures are *not* exceptions: the store reports them as
structured :class:`~livemap.models.results.PlacementResult` values.
These classes cover configuration and transport-boundary problems only.
"""

from __future__ import annotations


class LiveMapError(Exception):
    """Base exception for all livemap errors."""


class LiveMapConfigError(LiveMapError):
    """Invalid or missing configuration."""


class LiveMapRequestError(LiveMapError):
    """A transport request could not be turned into a store operation."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 400,
        field: str = "",
    ) -> None:
        self.status_code = status_code
        self.field = field
        super().__init__(message)
