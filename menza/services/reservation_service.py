import logging
from datetime import datetime, time, timedelta
from typing import Callable

from menza.domain.errors import FormatError, NotFoundError, RejectionReason, ReservationRejected
from menza.domain.models import ACTIVE, ALLOWED_DURATIONS, Canteen, Reservation, WorkingHour
from menza.dto.reservation_dto import CreateReservationDTO
from menza.repository.repo import MemoryRepository
from menza.utils.time_grid import (
    fits_within,
    intervals_overlap,
    is_valid_time_format,
    on_grid,
    parse_date,
    start_of,
    to_minute_offset,
)

logger = logging.getLogger(__name__)


def _is_missing(value) -> bool:
    return value is None or value == ""


class ReservationService:
    def __init__(self, repo: MemoryRepository, clock: Callable[[], datetime] = datetime.now):
        self.repo = repo
        self.clock = clock

    def _reject(self, reason: RejectionReason, payload: CreateReservationDTO):
        logger.info("Reservation rejected (%s) for student=%s canteen=%s",
                    reason.name, payload.studentId, payload.canteenId)
        raise ReservationRejected(reason)

    def _validate_reservation_payload(self, payload: CreateReservationDTO):
        fields = (payload.studentId, payload.canteenId, payload.date, payload.time, payload.duration)
        if any(_is_missing(value) for value in fields):
            self._reject(RejectionReason.MISSING_FIELDS, payload)

        if not self.repo.get_student_by_id(payload.studentId):
            self._reject(RejectionReason.STUDENT_NOT_FOUND, payload)

        # 30 and 60 only as real integers; "60", 60.0 and True are rejected
        if type(payload.duration) is not int or payload.duration not in ALLOWED_DURATIONS:
            self._reject(RejectionReason.INVALID_DURATION, payload)

        raw_time = payload.time.strftime("%H:%M") if isinstance(payload.time, time) else payload.time
        if not on_grid(raw_time) or not is_valid_time_format(raw_time):
            self._reject(RejectionReason.INVALID_TIME_SLOT, payload)
        start_minute = to_minute_offset(raw_time)

        try:
            reservation_date = parse_date(payload.date)
        except FormatError:
            self._reject(RejectionReason.INVALID_DATE, payload)

        requested_start = start_of(reservation_date, start_minute)
        if requested_start < self.clock():
            self._reject(RejectionReason.PAST_RESERVATION, payload)

        canteen = self.repo.get_canteen_by_id(payload.canteenId)
        if not canteen:
            self._reject(RejectionReason.CANTEEN_NOT_FOUND, payload)

        return canteen, reservation_date, start_minute, requested_start

    def _check_working_hours(self, canteen: Canteen, start_minute: int, duration: int) -> WorkingHour:
        # Working hours are the same for every calendar date.
        return fits_within(start_minute, duration, canteen.workingHours)

    def _has_student_overlap(self, student_id: str, requested_start: datetime, requested_end: datetime) -> bool:
        for res in self.repo.get_active_reservations_by_student_id(student_id):
            res_start, res_end = res.span()
            if intervals_overlap(requested_start, requested_end, res_start, res_end):
                return True
        return False

    def _count_overlapping(self, canteen_id: str, requested_start: datetime, requested_end: datetime) -> int:
        current_reservations_in_slot = 0
        for res in self.repo.get_active_reservations_by_canteen_id(canteen_id):
            res_start, res_end = res.span()
            if intervals_overlap(requested_start, requested_end, res_start, res_end):
                current_reservations_in_slot += 1
        return current_reservations_in_slot

    def create_reservation(self, payload: CreateReservationDTO) -> Reservation:
        with self.repo.lock:
            canteen, reservation_date, start_minute, requested_start = \
                self._validate_reservation_payload(payload)

            if not self._check_working_hours(canteen, start_minute, payload.duration):
                self._reject(RejectionReason.OUTSIDE_WORKING_HOURS, payload)
            # the block holds the whole interval, so the end stays on the same day
            requested_end = requested_start + timedelta(minutes=payload.duration)

            if self._has_student_overlap(payload.studentId, requested_start, requested_end):
                self._reject(RejectionReason.STUDENT_DOUBLE_BOOKED, payload)

            if self._count_overlapping(canteen.id, requested_start, requested_end) >= canteen.capacity:
                self._reject(RejectionReason.CAPACITY_EXCEEDED, payload)

            new_reservation = Reservation(
                studentId=payload.studentId,
                canteenId=payload.canteenId,
                date=reservation_date,
                time=requested_start.time(),
                duration=payload.duration,
                status=ACTIVE,
            )
            created = self.repo.add_reservation(new_reservation)

        logger.info("Reservation %s created: student=%s canteen=%s %s %s (%d min)",
                    created.id, created.studentId, created.canteenId,
                    created.date.isoformat(), created.time.strftime("%H:%M"), created.duration)
        return created

    def cancel_reservation(self, reservation_id: str) -> Reservation:
        reservation = self.repo.cancel_reservation(reservation_id)
        if not reservation:
            raise NotFoundError("Reservation not found")

        logger.info("Reservation %s cancelled", reservation_id)
        return reservation
