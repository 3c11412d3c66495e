"""Decoder and encoder for the ``simulated_v1`` capture format.

Frame layout (44 bytes)::

    0xE7 | flags:u8 | packet:u8 | time:f64 | utc_offset:f64 | lat:f64 | lon:f64 | dist2d:f64 | checksum:u8

Payload fields are little endian. The checksum is the sum of the 42 payload
bytes modulo 256. Flags: 1 time, 2 lat, 4 lon, 8 dist2d. Packet codes: 0
regular, 1 falling-edge trigger, anything else is treated as other.
"""

from __future__ import annotations

import struct
from typing import Optional

from ncom2text.state import DecoderStats
from schemas.ncom import DecodedUpdate, PacketClass

from .base import FeedResult

SYNC = 0xE7
PAYLOAD = struct.Struct("<BBddddd")
FRAME_LEN = 1 + PAYLOAD.size + 1

FLAG_TIME = 0x01
FLAG_LAT = 0x02
FLAG_LON = 0x04
FLAG_DIST2D = 0x08

PACKET_REGULAR = 0
PACKET_TRIGGER_FALLING_EDGE = 1
PACKET_OTHER = 2

_CLASS_BY_CODE = {
    PACKET_REGULAR: PacketClass.REGULAR,
    PACKET_TRIGGER_FALLING_EDGE: PacketClass.TRIGGER_FALLING_EDGE,
}
_CODE_BY_CLASS = {v: k for k, v in _CLASS_BY_CODE.items()}


def checksum(payload: bytes) -> int:
    return sum(payload) & 0xFF


def encode_update(update: DecodedUpdate) -> bytes:
    flags = 0
    time = utc_offset = 0.0
    if update.time is not None:
        flags |= FLAG_TIME
        time = update.time.seconds
        utc_offset = update.time.utc_offset
    if update.lat is not None:
        flags |= FLAG_LAT
    if update.lon is not None:
        flags |= FLAG_LON
    if update.dist2d is not None:
        flags |= FLAG_DIST2D
    payload = PAYLOAD.pack(
        flags,
        _CODE_BY_CLASS.get(update.packet_class, PACKET_OTHER),
        time,
        utc_offset,
        update.lat or 0.0,
        update.lon or 0.0,
        update.dist2d or 0.0,
    )
    return bytes([SYNC]) + payload + bytes([checksum(payload)])


def decode_payload(payload: bytes) -> DecodedUpdate:
    flags, code, time, utc_offset, lat, lon, dist2d = PAYLOAD.unpack(payload)
    return DecodedUpdate.from_flags(
        _CLASS_BY_CODE.get(code, PacketClass.OTHER),
        time_valid=bool(flags & FLAG_TIME),
        time=time,
        time_utc_offset=utc_offset,
        lat_valid=bool(flags & FLAG_LAT),
        lat=lat,
        lon_valid=bool(flags & FLAG_LON),
        lon=lon,
        dist2d_valid=bool(flags & FLAG_DIST2D),
        dist2d=dist2d,
    )


class SimulatedDecoder:
    def __init__(self) -> None:
        self.stats = DecoderStats()
        self._buf = bytearray()
        self._update: Optional[DecodedUpdate] = None

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

    @property
    def pending(self) -> int:
        return len(self._buf)

    def feed(self, byte: int) -> FeedResult:
        self.stats.note_byte()
        if not self._buf:
            if byte == SYNC:
                self._buf.append(byte)
            else:
                self.stats.note_skipped()
            return FeedResult.NONE

        self._buf.append(byte)
        if len(self._buf) < FRAME_LEN:
            return FeedResult.NONE

        payload = bytes(self._buf[1:-1])
        if self._buf[-1] != checksum(payload):
            self._resync()
            return FeedResult.NONE

        self._buf.clear()
        self._update = decode_payload(payload)
        self.stats.note_packet()
        return FeedResult.UPDATE

    def _resync(self) -> None:
        # Drop the bad sync byte, then restart at the next candidate sync.
        del self._buf[0]
        idx = self._buf.find(SYNC)
        if idx < 0:
            idx = len(self._buf)
        self.stats.note_skipped(1 + idx)
        del self._buf[:idx]

    def finish(self) -> None:
        # An unterminated frame at end of stream never became a record.
        self.stats.note_skipped(len(self._buf))
        self._buf.clear()

    def close(self) -> None:
        self._buf.clear()
        self._update = None


__all__ = [
    "FRAME_LEN",
    "PACKET_OTHER",
    "PACKET_REGULAR",
    "PACKET_TRIGGER_FALLING_EDGE",
    "SYNC",
    "SimulatedDecoder",
    "checksum",
    "decode_payload",
    "encode_update",
]
