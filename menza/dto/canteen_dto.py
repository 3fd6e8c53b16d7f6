from typing import List, Optional

from pydantic import BaseModel

from menza.domain.models import WorkingHour


class CreateCanteenDTO(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = None
    workingHours: Optional[List[WorkingHour]] = None


class UpdateCanteenDTO(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = None
    workingHours: Optional[List[WorkingHour]] = None
