"""Command-line entry point: ``livemap`` / ``python -m livemap``."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from livemap.config import LiveMapConfig
from livemap.exceptions import LiveMapConfigError
from livemap.server import run


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="livemap",
        description="Serve live positions and alert pins from an in-memory store.",
    )
    parser.add_argument("--host", help="Bind address (env: LIVEMAP_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (env: LIVEMAP_PORT)")
    parser.add_argument(
        "--sweep-interval",
        type=float,
        help="Seconds between background eviction sweeps, 0 disables (env: LIVEMAP_SWEEP_INTERVAL)",
    )
    parser.add_argument("--access-log", action="store_true", default=None, help="Log every HTTP request")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {
        "host": args.host,
        "port": args.port,
        "sweep_interval": args.sweep_interval,
        "access_log": args.access_log,
    }
    try:
        config = LiveMapConfig.from_env(**{k: v for k, v in overrides.items() if v is not None})
    except LiveMapConfigError as exc:
        print(f"livemap: {exc}", file=sys.stderr)
        return 2

    run(config)
    return 0
