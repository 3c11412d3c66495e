from __future__ import annotations

import sys
from dataclasses import asdict, dataclass
from typing import Any, Dict, Protocol, TextIO

DEFAULT_PROGRESS_INTERVAL = 4096


class CounterSource(Protocol):
    bytes_consumed: int
    packets_decoded: int
    bytes_skipped: int


@dataclass(frozen=True)
class ProgressSnapshot:
    bytes_consumed: int
    packets_decoded: int
    bytes_skipped: int

    @classmethod
    def of(cls, source: CounterSource) -> "ProgressSnapshot":
        return cls(
            bytes_consumed=source.bytes_consumed,
            packets_decoded=source.packets_decoded,
            bytes_skipped=source.bytes_skipped,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ProgressReporter:
    """Single-line progress display refreshed in place with a carriage return."""

    def __init__(self, stream: TextIO | None = None, *, interval: int = DEFAULT_PROGRESS_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("interval must be greater than zero")
        self.stream = stream if stream is not None else sys.stdout
        self.interval = interval
        self.reports_emitted = 0
        self.last: ProgressSnapshot | None = None
        self._finished = False

    def due(self, bytes_consumed: int) -> bool:
        return bytes_consumed % self.interval == 0

    def report(self, snapshot: ProgressSnapshot) -> None:
        self.stream.write(
            f"\rChars Read {snapshot.bytes_consumed}, "
            f"Packets Read {snapshot.packets_decoded}, "
            f"Chars Skipped {snapshot.bytes_skipped}"
        )
        self.stream.flush()
        self.reports_emitted += 1
        self.last = snapshot

    def finish(self, snapshot: ProgressSnapshot) -> None:
        if self._finished:
            return
        self._finished = True
        self.report(snapshot)
        self.stream.write("\n")
        self.stream.flush()


__all__ = ["CounterSource", "DEFAULT_PROGRESS_INTERVAL", "ProgressReporter", "ProgressSnapshot"]
