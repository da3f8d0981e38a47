from __future__ import annotations

from datetime import timedelta

from livemap.state.presence import PresenceRegistry
from _clock import T0, FrozenClock


def _registry(clock: FrozenClock) -> PresenceRegistry:
    return PresenceRegistry(clock=clock, stale_threshold=timedelta(seconds=30))


def test_upsert_creates_record_with_default_name() -> None:
    clock = FrozenClock()
    registry = _registry(clock)

    assert registry.upsert("abcdef", 40.0, -73.0).success

    [record] = registry.snapshot()
    assert record.subject_id == "abcdef"
    assert record.display_name == "User abcd"
    assert record.coordinates == (40.0, -73.0)
    assert record.last_updated == T0


def test_empty_name_falls_back_to_default() -> None:
    registry = _registry(FrozenClock())
    registry.upsert("u1", 1.0, 2.0, "")
    assert registry.snapshot()[0].display_name == "User u1"


def test_update_replaces_instead_of_merging() -> None:
    clock = FrozenClock()
    registry = _registry(clock)

    registry.upsert("u1", 40.0, -73.0, "Ada")
    clock.advance(seconds=10)
    registry.upsert("u1", 41.0, -74.0)

    [record] = registry.snapshot()
    # The old name is not carried over.
    assert record.display_name == "User u1"
    assert record.coordinates == (41.0, -74.0)
    assert record.last_updated == T0 + timedelta(seconds=10)


def test_update_with_new_name_overwrites() -> None:
    registry = _registry(FrozenClock())
    registry.upsert("u1", 40.0, -73.0, "Ada")
    registry.upsert("u1", 40.0, -73.0, "Grace")
    assert [r.display_name for r in registry.snapshot()] == ["Grace"]


def test_expiry_boundary_is_strictly_greater() -> None:
    clock = FrozenClock()
    registry = _registry(clock)
    registry.upsert("u1", 40.0, -73.0)

    clock.set(seconds=29.999)
    assert len(registry.snapshot()) == 1
    clock.set(seconds=30)
    assert len(registry.snapshot()) == 1
    clock.set(seconds=30.001)
    assert registry.snapshot() == []


def test_refresh_keeps_record_alive() -> None:
    clock = FrozenClock()
    registry = _registry(clock)
    registry.upsert("u1", 40.0, -73.0)
    clock.set(seconds=25)
    registry.upsert("u1", 40.0, -73.0)
    clock.set(seconds=50)
    assert registry.count() == 1


def test_remove_is_idempotent() -> None:
    registry = _registry(FrozenClock())
    registry.upsert("u1", 40.0, -73.0)

    assert registry.remove("u1").success
    assert registry.remove("u1").success
    assert registry.remove("never-seen").success
    assert registry.snapshot() == []


def test_count_applies_the_same_eviction() -> None:
    clock = FrozenClock()
    registry = _registry(clock)
    registry.upsert("old", 1.0, 1.0)
    clock.set(seconds=20)
    registry.upsert("new", 2.0, 2.0)

    clock.set(seconds=31)
    assert registry.count() == len(registry.snapshot()) == 1


def test_snapshot_returns_copies() -> None:
    registry = _registry(FrozenClock())
    registry.upsert("u1", 40.0, -73.0)

    first = registry.snapshot()
    first.clear()

    assert len(registry.snapshot()) == 1


def test_sweep_reports_dropped_records() -> None:
    clock = FrozenClock()
    registry = _registry(clock)
    registry.upsert("a", 1.0, 1.0)
    registry.upsert("b", 2.0, 2.0)
    clock.set(minutes=1)
    assert registry.sweep() == 2
    assert registry.sweep() == 0
