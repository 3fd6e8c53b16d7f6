from typing import Optional

from pydantic import BaseModel


class CreateStudentDTO(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    isAdmin: Optional[bool] = False
