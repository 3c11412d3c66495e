"""GPS time to civil calendar conversion.

GPS time started at 1980-01-06 00:00:00 and does not include leap seconds.
Decoders report the GPS-UTC difference alongside each timestamp, so the caller
supplies it as ``utc_offset`` rather than this module tracking a leap table.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import NamedTuple, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Seconds between the Unix epoch (1970-01-01) and the GPS epoch (1980-01-06).
GPS_UNIX_EPOCH_DELTA = 315964800.0

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Keep a day of headroom so zone offsets never push past year 1 or 9999.
_MIN_WHOLE_SECONDS = int((datetime(1, 1, 2, tzinfo=timezone.utc) - UNIX_EPOCH).total_seconds())
_MAX_WHOLE_SECONDS = int((datetime(9999, 12, 30, tzinfo=timezone.utc) - UNIX_EPOCH).total_seconds())


class CalendarTime(NamedTuple):
    timestamp: datetime  # naive wall-clock time, whole seconds
    millis: int


def resolve_timezone(name: str) -> Optional[tzinfo]:
    """Map a policy name to a tzinfo; ``None`` means the machine's local rules."""
    key = name.strip()
    lower = key.lower()
    if lower in ("utc", "z", "gmt"):
        return timezone.utc
    if lower == "local":
        return None
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ValueError(f"Unknown timezone: {name}") from None


def normalize(
    sat_time: float,
    utc_offset: float,
    *,
    epoch_delta: float = GPS_UNIX_EPOCH_DELTA,
    tz: Optional[tzinfo] = timezone.utc,
) -> CalendarTime:
    """Convert satellite seconds plus a UTC correction to calendar time.

    The whole-second part is taken with ``floor`` so negative values round
    toward negative infinity. Milliseconds are rounded half up and clamped to
    [0, 999] so a fraction of .9996 stays inside the current second.
    """
    civil = sat_time + epoch_delta + utc_offset
    whole = math.floor(civil)
    fraction = civil - whole

    millis = math.floor(0.5 + fraction * 1000.0)
    if millis < 0:
        millis = 0
    elif millis > 999:
        millis = 999

    whole = min(max(whole, _MIN_WHOLE_SECONDS), _MAX_WHOLE_SECONDS)
    instant = UNIX_EPOCH + timedelta(seconds=whole)
    local = instant.astimezone() if tz is None else instant.astimezone(tz)
    return CalendarTime(timestamp=local.replace(tzinfo=None), millis=millis)


def format_calendar(value: CalendarTime) -> str:
    ts = value.timestamp
    return (
        f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d} "
        f"{ts.hour:02d}:{ts.minute:02d}:{ts.second:02d}.{value.millis:03d}"
    )


__all__ = [
    "CalendarTime",
    "GPS_UNIX_EPOCH_DELTA",
    "UNIX_EPOCH",
    "format_calendar",
    "normalize",
    "resolve_timezone",
]
