import re
from datetime import date, datetime, time, timedelta
from typing import Iterator, Sequence

from menza.domain.errors import FormatError

_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


def is_valid_time_format(value: str) -> bool:
    """HH:mm, 24h clock, single digit hour allowed (7:30)."""
    return isinstance(value, str) and bool(_TIME_PATTERN.match(value))


def to_minute_offset(value: str) -> int:
    if not isinstance(value, str):
        raise FormatError(f"Invalid time format: {value!r}")
    match = _TIME_PATTERN.match(value)
    if not match:
        raise FormatError(f"Invalid time format: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def to_time(value: str) -> time:
    offset = to_minute_offset(value)
    return time(offset // 60, offset % 60)


def minutes_of(value: time) -> int:
    return value.hour * 60 + value.minute


def format_minutes(offset: int) -> str:
    return f"{offset // 60:02d}:{offset % 60:02d}"


def on_grid(value: str) -> bool:
    parts = value.split(":") if isinstance(value, str) else []
    if len(parts) != 2:
        return False
    return parts[1] in ("00", "30")


def intervals_overlap(start_a, end_a, start_b, end_b) -> bool:
    """Half-open [start, end) intervals; touching endpoints do not overlap."""
    return start_a < end_b and end_a > start_b


def parse_date(value: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise FormatError(f"Invalid date format: {value!r}") from exc


def date_range(start: date, end: date) -> Iterator[date]:
    # end before start yields nothing
    current = start
    while current <= end:
        yield current
        if current == date.max:
            return
        current += timedelta(days=1)


def fits_within(start: int, duration: int, blocks: Sequence):
    """Return the first working-hour block that holds [start, start+duration) entirely."""
    end = start + duration
    for block in blocks:
        if start >= minutes_of(block.from_time) and end <= minutes_of(block.to_time):
            return block
    return None


def start_of(day: date, start: int) -> datetime:
    return datetime.combine(day, time(start // 60, start % 60))


def span_of(day: date, start: int, duration: int) -> tuple[datetime, datetime]:
    begin = start_of(day, start)
    return begin, begin + timedelta(minutes=duration)


