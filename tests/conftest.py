from __future__ import annotations

import io
from typing import Dict, Optional

import pytest

from ncom2text.metrics import ProgressReporter
from ncom2text.state import DecoderStats
from schemas.ncom import DecodedUpdate, PacketClass, SatTime
from tools.decoders import FeedResult


class ScriptedDecoder:
    """Decoder double that completes an update at chosen byte positions.

    ``script`` maps a 1-based byte position to the update surfaced when that
    byte is fed. Bytes at other positions are counted as skipped.
    """

    def __init__(self, script: Dict[int, DecodedUpdate] | None = None) -> None:
        self.script = dict(script or {})
        self.stats = DecoderStats()
        self._update: Optional[DecodedUpdate] = None
        self.closed = False
        self.finished = 0
        self.history: list[tuple[int, int, int]] = []

    @property
    def update(self) -> Optional[DecodedUpdate]:
        return self._update

    @property
    def bytes_consumed(self) -> int:
        return self.stats.bytes_consumed

    @property
    def packets_decoded(self) -> int:
        return self.stats.packets_decoded

    @property
    def bytes_skipped(self) -> int:
        return self.stats.bytes_skipped

    def feed(self, byte: int) -> FeedResult:
        self.stats.note_byte()
        update = self.script.get(self.stats.bytes_consumed)
        if update is None:
            self.stats.note_skipped()
            result = FeedResult.NONE
        else:
            self._update = update
            self.stats.note_packet()
            result = FeedResult.UPDATE
        self.history.append((self.bytes_consumed, self.packets_decoded, self.bytes_skipped))
        return result

    def finish(self) -> None:
        self.finished += 1

    def close(self) -> None:
        self.closed = True


def make_update(
    packet_class: PacketClass = PacketClass.REGULAR,
    *,
    seconds: float | None = 1000000000.0,
    utc_offset: float = 18.0,
    lat: float | None = 51.5,
    lon: float | None = -1.25,
    dist2d: float | None = 12.3456,
) -> DecodedUpdate:
    return DecodedUpdate(
        packet_class=packet_class,
        time=None if seconds is None else SatTime(seconds=seconds, utc_offset=utc_offset),
        lat=lat,
        lon=lon,
        dist2d=dist2d,
    )


@pytest.fixture()
def progress_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def reporter(progress_stream: io.StringIO) -> ProgressReporter:
    return ProgressReporter(progress_stream, interval=4096)
