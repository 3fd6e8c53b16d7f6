from enum import Enum


class RejectionReason(str, Enum):
    MISSING_FIELDS = "Missing required fields"
    STUDENT_NOT_FOUND = "Student not found"
    INVALID_DURATION = "Duration must be 30 or 60 minutes"
    INVALID_TIME_SLOT = "Time must start on the hour or half hour"
    INVALID_DATE = "Date must be in YYYY-MM-DD format"
    PAST_RESERVATION = "Cannot create reservations in the past"
    CANTEEN_NOT_FOUND = "Canteen not found"
    OUTSIDE_WORKING_HOURS = "Reservation is outside of working hours"
    STUDENT_DOUBLE_BOOKED = "Student already has a reservation at this time"
    CAPACITY_EXCEEDED = "Canteen capacity reached for this slot"
    MISSING_QUERY_PARAMETERS = "Missing query parameters"


class FormatError(ValueError):
    pass


class NotFoundError(LookupError):
    pass


class ReservationRejected(ValueError):
    """Raised by the validator; `reason` tells which rule failed."""

    def __init__(self, reason: RejectionReason):
        super().__init__(reason.value)
        self.reason = reason


class QueryRejected(ValueError):
    def __init__(self, reason: RejectionReason):
        super().__init__(reason.value)
        self.reason = reason
