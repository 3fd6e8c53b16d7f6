from typing import Optional, Union

from pydantic import BaseModel


class StatusQueryDTO(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    duration: Optional[Union[int, str]] = None
