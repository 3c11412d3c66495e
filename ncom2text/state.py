from __future__ import annotations


class DecoderStats:
    """Byte and packet counters owned by a single decoder session."""

    def __init__(self) -> None:
        self.bytes_consumed = 0
        self.packets_decoded = 0
        self.bytes_skipped = 0

    def note_byte(self) -> None:
        self.bytes_consumed += 1

    def note_packet(self) -> None:
        self.packets_decoded += 1

    def note_skipped(self, count: int = 1) -> None:
        if count < 0:
            raise ValueError("skipped count must be >= 0")
        self.bytes_skipped += count


__all__ = ["DecoderStats"]
