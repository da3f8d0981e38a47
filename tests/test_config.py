from __future__ import annotations

from datetime import timedelta

import pytest

from livemap.config import LiveMapConfig
from livemap.exceptions import LiveMapConfigError


def test_defaults_match_reference_behaviour() -> None:
    config = LiveMapConfig()
    assert config.stale_after == timedelta(seconds=30)
    assert config.pin_ttl == timedelta(minutes=20)
    assert config.exclusion_radius == 100.0
    assert config.poll_interval == 10.0
    assert config.sweep_interval == 0.0


def test_from_env_reads_livemap_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIVEMAP_STALE_THRESHOLD", "45")
    monkeypatch.setenv("LIVEMAP_EXCLUSION_RADIUS", "250.5")
    monkeypatch.setenv("LIVEMAP_PORT", "9000")
    monkeypatch.setenv("LIVEMAP_ACCESS_LOG", "yes")

    config = LiveMapConfig.from_env()

    assert config.stale_threshold == 45.0
    assert config.exclusion_radius == 250.5
    assert config.port == 9000
    assert config.access_log is True


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIVEMAP_PORT", "9000")
    monkeypatch.setenv("LIVEMAP_PIN_THRESHOLD", "60")

    config = LiveMapConfig.from_env(port=9100, pin_threshold=120.0)

    assert config.port == 9100
    assert config.pin_threshold == 120.0


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIVEMAP_STALE_THRESHOLD", "soon")
    with pytest.raises(LiveMapConfigError, match="LIVEMAP_STALE_THRESHOLD"):
        LiveMapConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"stale_threshold": 0},
        {"pin_threshold": -1},
        {"exclusion_radius": -0.5},
        {"sweep_interval": -1},
        {"port": 0},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, float]) -> None:
    with pytest.raises(LiveMapConfigError):
        LiveMapConfig(**kwargs)


def test_host_override_wins_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIVEMAP_HOST", "0.0.0.0")
    assert LiveMapConfig.from_env().host == "0.0.0.0"
    assert LiveMapConfig.from_env(host="127.0.0.2").host == "127.0.0.2"
