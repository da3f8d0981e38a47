#!/usr/bin/env python3
"""Drive a running livemap server with simulated browser clients.

Each simulated subject wanders around a centre point, reports its
position every ``--refresh`` seconds and polls the snapshot on the same
cadence, like the browser client does. A fraction of subjects drop an
alert pin now and then; rejections (too close to their own pins) are
counted rather than treated as failures.

Usage
-----
Start the server, then::

    python scripts/simulate_clients.py --subjects 20 --duration 60

Options::

    --url URL            Server base URL (default: http://127.0.0.1:8080)
    --subjects N         Number of simulated subjects (default: 10)
    --duration SECONDS   How long to run (default: 30)
    --refresh SECONDS    Position/poll cadence (default: 10)
    --pin-chance P       Per-tick probability of placing a pin (default: 0.1)
    --center LAT,LON     Centre of the random walk (default: 52.52,13.405)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import secrets
import sys
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import aiohttp

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from livemap.geo import format_distance  # noqa: E402

# Roughly 50 m of latitude per random-walk step.
_STEP_DEG = 0.00045


@dataclass
class Subject:
    subject_id: str
    name: str
    latitude: float
    longitude: float

    def wander(self, rng: random.Random) -> None:
        self.latitude += rng.uniform(-_STEP_DEG, _STEP_DEG)
        self.longitude += rng.uniform(-_STEP_DEG, _STEP_DEG)


@dataclass
class Stats:
    counts: Counter[str] = field(default_factory=Counter)
    last_positions: int = 0
    last_pins: int = 0


async def _run_subject(
    session: aiohttp.ClientSession,
    base_url: str,
    subject: Subject,
    args: argparse.Namespace,
    stats: Stats,
    rng: random.Random,
) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + args.duration
    try:
        while loop.time() < deadline:
            subject.wander(rng)
            async with session.put(
                f"{base_url}/api/positions/{subject.subject_id}",
                json={"latitude": subject.latitude, "longitude": subject.longitude, "name": subject.name},
            ) as resp:
                stats.counts["position" if resp.status == 200 else "position_error"] += 1

            if rng.random() < args.pin_chance:
                async with session.post(
                    f"{base_url}/api/pins",
                    json={
                        "subjectId": subject.subject_id,
                        "name": subject.name,
                        "latitude": subject.latitude,
                        "longitude": subject.longitude,
                    },
                ) as resp:
                    stats.counts[{200: "pin", 409: "pin_rejected"}.get(resp.status, "pin_error")] += 1

            async with session.get(f"{base_url}/api/snapshot") as resp:
                body = await resp.json()
                stats.last_positions = len(body["positions"])
                stats.last_pins = len(body["pins"])
                stats.counts["poll"] += 1

            await asyncio.sleep(args.refresh)
    finally:
        async with session.delete(f"{base_url}/api/positions/{subject.subject_id}") as resp:
            stats.counts["removed" if resp.status == 200 else "remove_error"] += 1


async def _main(args: argparse.Namespace) -> int:
    lat, lon = (float(part) for part in args.center.split(","))
    rng = random.Random(args.seed)
    subjects = [
        Subject(subject_id=secrets.token_hex(8), name=f"Sim {n}", latitude=lat, longitude=lon)
        for n in range(args.subjects)
    ]
    stats = Stats()
    base_url = args.url.rstrip("/")

    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=10)) as session:
        await asyncio.gather(*(_run_subject(session, base_url, s, args, stats, rng) for s in subjects))

        async with session.get(
            f"{base_url}/api/pins/nearest",
            params={"latitude": str(lat), "longitude": str(lon)},
        ) as resp:
            nearest = await resp.json()

    print(f"requests: {dict(sorted(stats.counts.items()))}")
    print(f"last snapshot: {stats.last_positions} position(s), {stats.last_pins} pin(s)")
    if nearest["pin"] is not None:
        print(f"nearest pin to centre: {nearest['pin']['raisedByName']} {format_distance(nearest['distance'])} away")
    errors = sum(v for k, v in stats.counts.items() if k.endswith("_error"))
    return 1 if errors else 0


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0])
    parser.add_argument("--url", default="http://127.0.0.1:8080")
    parser.add_argument("--subjects", type=int, default=10)
    parser.add_argument("--duration", type=float, default=30.0)
    parser.add_argument("--refresh", type=float, default=10.0)
    parser.add_argument("--pin-chance", type=float, default=0.1)
    parser.add_argument("--center", default="52.52,13.405")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random walk")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


if __name__ == "__main__":
    cli_args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if cli_args.verbose else logging.WARNING)
    sys.exit(asyncio.run(_main(cli_args)))
