"""Write a synthetic ``simulated_v1`` capture for demos and tests."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Iterator

from schemas.ncom import DecodedUpdate, PacketClass, SatTime
from tools.decoders.simulated import encode_update

# Fixed vehicle start point
BASE_LAT = 51.5
BASE_LON = -1.25
# GPS week 2000, Sunday 00:00
DEFAULT_START_TIME = 2000 * 7 * 86400.0
DEFAULT_UTC_OFFSET = -18.0


def simulate_updates(
    count: int,
    *,
    rate_hz: float = 100.0,
    start_time: float = DEFAULT_START_TIME,
    utc_offset: float = DEFAULT_UTC_OFFSET,
    trigger_every: int = 0,
    other_every: int = 0,
    invalid_every: int = 0,
    rng: random.Random | None = None,
) -> Iterator[DecodedUpdate]:
    """Yield ``count`` updates along a slowly wandering track."""

    rng = rng or random.Random()
    lat, lon, dist = BASE_LAT, BASE_LON, 0.0
    step = 1.0 / rate_hz
    for i in range(1, count + 1):
        lat += rng.uniform(-1e-6, 1e-6)
        lon += rng.uniform(-1e-6, 1e-6)
        dist += rng.uniform(0.0, 0.3)

        packet_class = PacketClass.REGULAR
        if trigger_every and i % trigger_every == 0:
            packet_class = PacketClass.TRIGGER_FALLING_EDGE
        elif other_every and i % other_every == 0:
            packet_class = PacketClass.OTHER

        if invalid_every and i % invalid_every == 0:
            yield DecodedUpdate(packet_class=packet_class, lat=lat)
            continue

        yield DecodedUpdate(
            packet_class=packet_class,
            time=SatTime(seconds=start_time + i * step, utc_offset=utc_offset),
            lat=lat,
            lon=lon,
            dist2d=dist,
        )


def build_stream(updates: Iterator[DecodedUpdate], *, garbage_every: int = 0, rng: random.Random | None = None) -> bytes:
    rng = rng or random.Random()
    out = bytearray()
    for i, update in enumerate(updates, start=1):
        out += encode_update(update)
        if garbage_every and i % garbage_every == 0:
            # Noise without sync bytes, so it is skipped rather than framed.
            out += bytes(rng.choice(range(0x00, 0xE7)) for _ in range(rng.randint(1, 16)))
    return bytes(out)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write a simulated_v1 capture file")
    parser.add_argument("output")
    parser.add_argument("--count", type=int, default=1000)
    parser.add_argument("--rate-hz", type=float, default=100.0)
    parser.add_argument("--trigger-every", type=int, default=0)
    parser.add_argument("--other-every", type=int, default=0)
    parser.add_argument("--garbage-every", type=int, default=0)
    parser.add_argument("--invalid-every", type=int, default=0)
    parser.add_argument("--start-time", type=float, default=DEFAULT_START_TIME)
    parser.add_argument("--utc-offset", type=float, default=DEFAULT_UTC_OFFSET)
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.count < 0 or args.rate_hz <= 0:
        print("count must be >= 0 and rate-hz > 0", file=sys.stderr)
        return 2

    rng = random.Random(args.seed)
    updates = simulate_updates(
        args.count,
        rate_hz=args.rate_hz,
        start_time=args.start_time,
        utc_offset=args.utc_offset,
        trigger_every=args.trigger_every,
        other_every=args.other_every,
        invalid_every=args.invalid_every,
        rng=rng,
    )
    data = build_stream(updates, garbage_every=args.garbage_every, rng=rng)
    Path(args.output).write_bytes(data)
    print(f"[SIM] Wrote {args.count} frames ({len(data)} bytes) to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
