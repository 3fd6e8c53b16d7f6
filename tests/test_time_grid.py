import pytest
from datetime import date, datetime, time

from menza.domain.errors import FormatError
from menza.domain.models import WorkingHour
from menza.utils.time_grid import (
    date_range,
    fits_within,
    format_minutes,
    intervals_overlap,
    is_valid_time_format,
    on_grid,
    parse_date,
    span_of,
    start_of,
    to_minute_offset,
    to_time,
)


@pytest.mark.parametrize("value,expected", [
    ("00:00", 0),
    ("07:30", 450),
    ("7:30", 450),
    ("12:00", 720),
    ("23:59", 1439),
])
def test_to_minute_offset(value, expected):
    assert to_minute_offset(value) == expected


@pytest.mark.parametrize("value", ["24:00", "25:00", "12:60", "12:99", "12", "12:0", "1200", "abc", "", None])
def test_to_minute_offset_rejects_bad_format(value):
    with pytest.raises(FormatError):
        to_minute_offset(value)


def test_is_valid_time_format():
    assert is_valid_time_format("9:00")
    assert is_valid_time_format("23:59")
    assert not is_valid_time_format("24:00")
    assert not is_valid_time_format("12:0")
    assert not is_valid_time_format(None)


def test_on_grid():
    for value in ("12:00", "07:30", "23:00", "23:30"):
        assert on_grid(value)
    for value in ("12:15", "12:45", "12:10", "12:59", "1200", ""):
        assert not on_grid(value)


def test_intervals_overlap_half_open():
    assert intervals_overlap(0, 30, 15, 45)
    assert intervals_overlap(0, 60, 15, 30)
    assert not intervals_overlap(0, 30, 30, 60)
    assert not intervals_overlap(30, 60, 0, 30)


def test_intervals_overlap_datetimes():
    a = (datetime(2025, 12, 5, 11, 0), datetime(2025, 12, 5, 12, 0))
    b = (datetime(2025, 12, 5, 12, 0), datetime(2025, 12, 5, 12, 30))
    assert not intervals_overlap(*a, *b)
    assert intervals_overlap(*a, datetime(2025, 12, 5, 11, 30), datetime(2025, 12, 5, 12, 30))


def test_date_range_inclusive():
    days = list(date_range(date(2025, 12, 30), date(2026, 1, 2)))
    assert days == [date(2025, 12, 30), date(2025, 12, 31), date(2026, 1, 1), date(2026, 1, 2)]


def test_date_range_single_day():
    assert list(date_range(date(2025, 12, 5), date(2025, 12, 5))) == [date(2025, 12, 5)]


def test_date_range_reversed_is_empty():
    assert list(date_range(date(2025, 12, 5), date(2025, 12, 1))) == []


def test_parse_date():
    assert parse_date("2025-12-05") == date(2025, 12, 5)
    with pytest.raises(FormatError):
        parse_date("05.12.2025")
    with pytest.raises(FormatError):
        parse_date(None)


def test_format_and_to_time():
    assert format_minutes(450) == "07:30"
    assert to_time("7:30") == time(7, 30)


def test_span_of():
    assert span_of(date(2025, 12, 5), 690, 60) == (datetime(2025, 12, 5, 11, 30), datetime(2025, 12, 5, 12, 30))


def test_fits_within_picks_single_block():
    blocks = [
        WorkingHour(meal="breakfast", **{"from": "07:00", "to": "10:00"}),
        WorkingHour(meal="lunch", **{"from": "11:00", "to": "15:00"}),
    ]
    assert fits_within(420, 30, blocks).meal == "breakfast"
    assert fits_within(14 * 60, 60, blocks).meal == "lunch"
    assert fits_within(600, 30, blocks) is None
    assert fits_within(570, 60, blocks) is None


def test_date_range_stops_at_last_representable_day():
    assert list(date_range(date(9999, 12, 30), date.max)) == [date(9999, 12, 30), date(9999, 12, 31)]


def test_start_of():
    assert start_of(date.max, 23 * 60 + 30) == datetime(9999, 12, 31, 23, 30)
