from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from schemas.ncom import DecodedUpdate, PacketClass
from tools.translators.ncom_to_text import COLUMNS, DELIMITER, format_update

from conftest import make_update


def test_full_record_formats_every_column():
    line = format_update(make_update())
    assert line == "1000000000.000,2011-09-14 01:46:58.000,51.50000000,-1.25000000,12.346\n"


def test_latitude_valid_longitude_invalid():
    update = make_update(seconds=None, lat=51.5, lon=None, dist2d=None)
    line = format_update(update)
    assert line == ",,51.50000000,,\n"
    assert line.rstrip("\n").split(DELIMITER)[2] == "51.50000000"


def test_invalid_time_emits_two_empty_columns():
    line = format_update(make_update(seconds=None))
    fields = line.rstrip("\n").split(DELIMITER)
    assert fields[:2] == ["", ""]
    assert line.startswith(",,")


def test_small_time_is_right_aligned():
    line = format_update(make_update(seconds=12.5, utc_offset=0.0))
    assert line.startswith("    12.500,1980-01-06 00:00:12.500,")


@pytest.mark.parametrize(
    "update",
    [
        make_update(),
        make_update(seconds=None),
        make_update(lat=None, lon=None, dist2d=None),
        make_update(PacketClass.TRIGGER_FALLING_EDGE, seconds=None, lat=None),
        make_update(PacketClass.OTHER, dist2d=None),
        DecodedUpdate(packet_class=PacketClass.REGULAR),
    ],
)
def test_column_count_is_fixed(update):
    line = format_update(update)
    assert line.endswith("\n")
    assert len(line.rstrip("\n").split(DELIMITER)) == len(COLUMNS)


def test_formatting_is_idempotent():
    update = make_update(seconds=1234.5678)
    assert format_update(update) == format_update(update)


def test_timezone_policy_changes_calendar_column_only():
    update = make_update()
    shifted = format_update(update, tz=timezone(timedelta(hours=-5)))
    fields = shifted.rstrip("\n").split(DELIMITER)
    assert fields[1] == "2011-09-13 20:46:58.000"
    assert fields[0] == "1000000000.000"


def test_epoch_delta_override():
    line = format_update(make_update(seconds=0.0, utc_offset=0.0), epoch_delta=0.0)
    assert line.split(DELIMITER)[1] == "1970-01-01 00:00:00.000"


def test_from_flags_ignores_values_behind_false_flags():
    update = DecodedUpdate.from_flags(
        PacketClass.REGULAR,
        time_valid=False,
        time=99.0,
        lat_valid=True,
        lat=10.0,
        lon_valid=False,
        lon=20.0,
        dist2d_valid=True,
        dist2d=float("nan"),
    )
    assert update.time is None
    assert update.lon is None
    assert update.dist2d is None
    assert format_update(update) == ",,10.00000000,,\n"


@pytest.mark.parametrize("field", ["lat", "lon", "dist2d"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_field_is_rejected(field, value):
    with pytest.raises(ValidationError):
        DecodedUpdate(packet_class=PacketClass.REGULAR, **{field: value})


def test_non_finite_wire_values_become_empty_columns():
    update = DecodedUpdate.from_flags(
        PacketClass.REGULAR,
        lat_valid=True,
        lat=float("inf"),
        lon_valid=True,
        lon=float("-inf"),
        dist2d_valid=True,
        dist2d=float("nan"),
    )
    assert (update.lat, update.lon, update.dist2d) == (None, None, None)
    assert format_update(update) == ",,,,\n"
