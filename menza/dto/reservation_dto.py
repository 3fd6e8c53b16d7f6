from typing import Any, Optional

from pydantic import BaseModel


class CreateReservationDTO(BaseModel):
    # Fields are left untyped so that presence, then each rule, is checked by
    # the service in order instead of failing early in request parsing.
    studentId: Optional[Any] = None
    canteenId: Optional[Any] = None
    date: Optional[Any] = None
    time: Optional[Any] = None
    duration: Optional[Any] = None
