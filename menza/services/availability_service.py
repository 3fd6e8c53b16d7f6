"""Availability of canteen capacity over a date/time range.

A slot is emitted only when it fits entirely inside one of the canteen's
working-hour blocks; candidates that fall outside are dropped, not reported
with zero capacity.
"""
import logging
from datetime import date
from typing import Iterable, Iterator, List

from menza.domain.errors import NotFoundError, QueryRejected, RejectionReason
from menza.domain.models import ALLOWED_DURATIONS, Canteen, CanteenStatus, Reservation, Slot
from menza.dto.status_dto import StatusQueryDTO
from menza.repository.repo import MemoryRepository
from menza.utils.time_grid import (
    date_range,
    fits_within,
    format_minutes,
    intervals_overlap,
    parse_date,
    span_of,
    to_minute_offset,
)

logger = logging.getLogger(__name__)


class SlotSequence:
    """Lazy, restartable: every iteration recomputes from `reservations`."""

    def __init__(self, canteen: Canteen, reservations: Iterable[Reservation],
                 start_date: date, end_date: date, start_minute: int, end_minute: int, duration: int):
        self.canteen = canteen
        self.reservations = reservations
        self.start_date = start_date
        self.end_date = end_date
        self.start_minute = start_minute
        self.end_minute = end_minute
        self.duration = duration

    def _remaining(self, slot_start, slot_end) -> int:
        taken = 0
        for res in self.reservations:
            if res.canteenId != self.canteen.id or not res.is_active:
                continue
            res_start, res_end = res.span()
            if intervals_overlap(slot_start, slot_end, res_start, res_end):
                taken += 1
        return max(0, self.canteen.capacity - taken)

    def __iter__(self) -> Iterator[Slot]:
        for day in date_range(self.start_date, self.end_date):
            for minute in range(self.start_minute, self.end_minute, self.duration):
                block = fits_within(minute, self.duration, self.canteen.workingHours)
                if block is None:
                    continue
                slot_start, slot_end = span_of(day, minute, self.duration)
                yield Slot(
                    date=day,
                    meal=block.meal,
                    startTime=format_minutes(minute),
                    remainingCapacity=self._remaining(slot_start, slot_end),
                )


def compute_slots(canteen: Canteen, reservations: Iterable[Reservation], start_date: date, end_date: date,
                  start_time: str, end_time: str, duration: int) -> SlotSequence:
    return SlotSequence(
        canteen,
        reservations,
        start_date,
        end_date,
        to_minute_offset(start_time),
        to_minute_offset(end_time),
        duration,
    )


def _parse_duration(value) -> int:
    try:
        duration = int(value)
    except (TypeError, ValueError):
        raise QueryRejected(RejectionReason.INVALID_DURATION)
    if duration not in ALLOWED_DURATIONS:
        raise QueryRejected(RejectionReason.INVALID_DURATION)
    return duration


class AvailabilityService:
    def __init__(self, repo: MemoryRepository):
        self.repo = repo

    def _validate_query(self, query: StatusQueryDTO):
        fields = (query.startDate, query.endDate, query.startTime, query.endTime, query.duration)
        if any(value is None or value == "" for value in fields):
            raise QueryRejected(RejectionReason.MISSING_QUERY_PARAMETERS)

        duration = _parse_duration(query.duration)
        # raises FormatError on malformed input
        to_minute_offset(query.startTime)
        to_minute_offset(query.endTime)
        return parse_date(query.startDate), parse_date(query.endDate), duration

    def _status_for(self, canteen: Canteen, start_date: date, end_date: date,
                    query: StatusQueryDTO, duration: int) -> CanteenStatus:
        slots = compute_slots(canteen, self.repo.reservations, start_date, end_date,
                              query.startTime, query.endTime, duration)
        return CanteenStatus(canteenId=canteen.id, slots=list(slots))

    def canteen_status(self, canteen_id: str, query: StatusQueryDTO) -> CanteenStatus:
        canteen = self.repo.get_canteen_by_id(canteen_id)
        if not canteen:
            raise NotFoundError("Canteen not found")

        start_date, end_date, duration = self._validate_query(query)
        return self._status_for(canteen, start_date, end_date, query, duration)

    def global_status(self, query: StatusQueryDTO) -> List[CanteenStatus]:
        start_date, end_date, duration = self._validate_query(query)
        canteens = self.repo.get_all_canteens()
        logger.debug("Computing slots for %d canteens between %s and %s", len(canteens), start_date, end_date)
        return [self._status_for(c, start_date, end_date, query, duration) for c in canteens]
