"""Service configuration for livemap."""

from __future__ import annotations

import dataclasses
import os
from datetime import timedelta
from typing import Any

from livemap.exceptions import LiveMapConfigError

DEFAULT_STALE_THRESHOLD = 30.0
DEFAULT_PIN_THRESHOLD = 20 * 60.0
DEFAULT_EXCLUSION_RADIUS = 100.0
DEFAULT_POLL_INTERVAL = 10.0


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise LiveMapConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class LiveMapConfig:
    """Service configuration.

    Parameters
    ----------
    stale_threshold : float
        Seconds after its last update a position record is evicted.
    pin_threshold : float
        Seconds after creation an alert pin is evicted.
    exclusion_radius : float
        Minimum distance in meters between two live pins of one creator.
    poll_interval : float
        Polling/refresh cadence advertised to clients in snapshots.
        The store itself never polls.
    sweep_interval : float
        Seconds between background eviction sweeps run by the HTTP app.
        ``0`` disables the sweep; eviction on read still applies.
    host : str
        Interface the HTTP app binds to.
    port : int
        Port the HTTP app binds to.
    access_log : bool
        Emit aiohttp access log lines.
    """

    stale_threshold: float = DEFAULT_STALE_THRESHOLD
    pin_threshold: float = DEFAULT_PIN_THRESHOLD
    exclusion_radius: float = DEFAULT_EXCLUSION_RADIUS
    poll_interval: float = DEFAULT_POLL_INTERVAL
    sweep_interval: float = 0.0
    host: str = "127.0.0.1"
    port: int = 8080
    access_log: bool = False

    def __post_init__(self) -> None:
        if self.stale_threshold <= 0:
            raise LiveMapConfigError("stale_threshold must be positive")
        if self.pin_threshold <= 0:
            raise LiveMapConfigError("pin_threshold must be positive")
        if self.exclusion_radius < 0:
            raise LiveMapConfigError("exclusion_radius must not be negative")
        if self.poll_interval <= 0:
            raise LiveMapConfigError("poll_interval must be positive")
        if self.sweep_interval < 0:
            raise LiveMapConfigError("sweep_interval must not be negative")
        if not 1 <= self.port <= 65535:
            raise LiveMapConfigError(f"port out of range: {self.port}")

    @property
    def stale_after(self) -> timedelta:
        return timedelta(seconds=self.stale_threshold)

    @property
    def pin_ttl(self) -> timedelta:
        return timedelta(seconds=self.pin_threshold)

    @classmethod
    def from_env(cls, **overrides: Any) -> LiveMapConfig:
        """Create configuration from environment variables.

        Reads optional ``LIVEMAP_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        LiveMapConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "LIVEMAP_STALE_THRESHOLD": "stale_threshold",
            "LIVEMAP_PIN_THRESHOLD": "pin_threshold",
            "LIVEMAP_EXCLUSION_RADIUS": "exclusion_radius",
            "LIVEMAP_POLL_INTERVAL": "poll_interval",
            "LIVEMAP_SWEEP_INTERVAL": "sweep_interval",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, float)

        host_env = env.get("LIVEMAP_HOST")
        if host_env is not None and "host" not in overrides:
            config_kwargs["host"] = host_env

        # port is an int, handle separately
        port_env = env.get("LIVEMAP_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_number("LIVEMAP_PORT", port_env, int)

        if "access_log" not in overrides:
            config_kwargs["access_log"] = _env_bool(env.get("LIVEMAP_ACCESS_LOG"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
