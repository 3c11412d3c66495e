"""Translate decoded navigation updates into delimited text lines."""

from __future__ import annotations

from datetime import timezone, tzinfo
from typing import List, Optional

from ncom2text.timebase import GPS_UNIX_EPOCH_DELTA, format_calendar, normalize
from schemas.ncom import DecodedUpdate

DELIMITER = ","

COLUMNS = ("gps_time", "calendar_time", "lat_deg", "lon_deg", "dist2d")


def _fmt(value: Optional[float], spec: str) -> str:
    return "" if value is None else format(value, spec)


def format_update(
    update: DecodedUpdate,
    *,
    tz: Optional[tzinfo] = timezone.utc,
    epoch_delta: float = GPS_UNIX_EPOCH_DELTA,
) -> str:
    """
    Render one update as a newline-terminated line.

    Every line carries the same columns (see ``COLUMNS``); an invalid field
    leaves its column empty, and invalid time empties both time columns.
    """

    fields: List[str]
    if update.time is not None:
        calendar = normalize(
            update.time.seconds,
            update.time.utc_offset,
            epoch_delta=epoch_delta,
            tz=tz,
        )
        fields = [format(update.time.seconds, "10.3f"), format_calendar(calendar)]
    else:
        fields = ["", ""]

    fields.append(_fmt(update.lat, ".8f"))
    fields.append(_fmt(update.lon, ".8f"))
    fields.append(_fmt(update.dist2d, ".3f"))
    return DELIMITER.join(fields) + "\n"


__all__ = ["COLUMNS", "DELIMITER", "format_update"]
