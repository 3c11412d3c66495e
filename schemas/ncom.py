from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class PacketClass(str, Enum):
    REGULAR = "regular"
    TRIGGER_FALLING_EDGE = "trigger_falling_edge"
    OTHER = "other"


class SatTime(BaseModel):
    model_config = ConfigDict(frozen=True)

    seconds: float          # satellite seconds since the GPS epoch
    utc_offset: float = 0.0  # leap-second correction (s)

    @field_validator("seconds", "utc_offset", mode="after")
    @classmethod
    def check_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("time values must be finite")
        return v


class DecodedUpdate(BaseModel):
    """One completed update surfaced by a decoder session.

    A field set to ``None`` is invalid for this update; formatters must emit
    an empty column for it.
    """

    model_config = ConfigDict(frozen=True)

    packet_class: PacketClass
    time: Optional[SatTime] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    dist2d: Optional[float] = None

    @field_validator("lat", "lon", "dist2d", mode="after")
    @classmethod
    def check_finite(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not math.isfinite(v):
            raise ValueError("use None for an invalid field, not a non-finite value")
        return v

    @classmethod
    def from_flags(
        cls,
        packet_class: PacketClass,
        *,
        time_valid: bool = False,
        time: float = 0.0,
        time_utc_offset: float = 0.0,
        lat_valid: bool = False,
        lat: float = 0.0,
        lon_valid: bool = False,
        lon: float = 0.0,
        dist2d_valid: bool = False,
        dist2d: float = 0.0,
    ) -> "DecodedUpdate":
        sat_time = None
        if time_valid and math.isfinite(time) and math.isfinite(time_utc_offset):
            sat_time = SatTime(seconds=time, utc_offset=time_utc_offset)
        return cls(
            packet_class=packet_class,
            time=sat_time,
            lat=_flagged(lat_valid, lat),
            lon=_flagged(lon_valid, lon),
            dist2d=_flagged(dist2d_valid, dist2d),
        )


def _flagged(valid: bool, value: float) -> Optional[float]:
    if not valid or not math.isfinite(value):
        return None
    return float(value)


__all__ = ["DecodedUpdate", "PacketClass", "SatTime"]
