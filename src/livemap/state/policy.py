"""Liveness and admission comparators.

Both comparators are strict: a record aged exactly the threshold is still
live, and a pin exactly ``radius`` meters away is admitted.
"""

from __future__ import annotations

from datetime import datetime, timedelta


def is_expired(now: datetime, stamped_at: datetime, threshold: timedelta) -> bool:
    return now - stamped_at > threshold


def is_too_close(distance: float, radius: float) -> bool:
    return distance < radius
