from pydantic import BaseModel, Field, field_serializer, field_validator
from datetime import date, datetime, time
from typing import List, Literal, Optional

from menza.utils.time_grid import span_of, minutes_of, to_time

ACTIVE = "Active"
CANCELLED = "Cancelled"
ALLOWED_DURATIONS = (30, 60)


class Student(BaseModel):
    id: Optional[str] = None
    name: str
    email: str
    isAdmin: bool = Field(default=False)

class WorkingHour(BaseModel):
    meal: Literal["breakfast", "lunch", "dinner"]
    from_time: time = Field(
        ...,
        validation_alias="from",
        serialization_alias="from"
    )

    to_time: time = Field(
        ...,
        validation_alias="to",
        serialization_alias="to"
    )

    @field_validator('from_time', 'to_time', mode='before')
    @classmethod
    def parse_clock(cls, value):
        if isinstance(value, str):
            return to_time(value)
        return value

    @field_serializer('from_time', 'to_time')
    def serialize_time(self, time_obj: time) -> str:
        return time_obj.strftime("%H:%M")

    class Config:
        populate_by_name = True

class Canteen(BaseModel):
    id: Optional[str] = None
    name: str
    location: str
    capacity: int = Field(..., gt=0)
    workingHours: List[WorkingHour]

class Reservation(BaseModel):
    id: Optional[str] = None
    studentId: str
    canteenId: str
    date: date
    time: time
    duration: int = Field(..., ge=30, le=60)
    status: Literal["Active", "Cancelled"] = Field(default=ACTIVE)

    @field_validator('time', mode='before')
    @classmethod
    def parse_clock(cls, value):
        if isinstance(value, str):
            return to_time(value)
        return value

    @field_serializer('time')
    def serialize_reservation_time(self, time_obj: time) -> str:
        return time_obj.strftime("%H:%M")

    @field_serializer('date')
    def serialize_reservation_date(self, date_obj: date) -> str:
        return date_obj.isoformat()

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE

    def span(self) -> tuple[datetime, datetime]:
        return span_of(self.date, minutes_of(self.time), self.duration)


class Slot(BaseModel):
    date: date
    meal: str
    startTime: str
    remainingCapacity: int

    @field_serializer('date')
    def serialize_slot_date(self, date_obj: date) -> str:
        return date_obj.isoformat()


class CanteenStatus(BaseModel):
    canteenId: str
    slots: List[Slot]
