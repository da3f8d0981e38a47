"""State/store layer.

This package owns every piece of shared mutable state in livemap: the
presence registry, the alert pin registry, and the :class:`LiveMapStore`
facade that serializes access to both.
"""

from livemap.state.pins import AlertPinRegistry
from livemap.state.presence import PresenceRegistry
from livemap.state.store import LiveMapStore

__all__ = ["AlertPinRegistry", "LiveMapStore", "PresenceRegistry"]
