import logging
from typing import Optional

from menza.domain.errors import NotFoundError
from menza.domain.models import Student
from menza.dto.student_dto import CreateStudentDTO
from menza.repository.repo import MemoryRepository

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(self, repo: MemoryRepository):
        self.repo = repo

    def register(self, payload: CreateStudentDTO) -> Student:
        if not payload.name or not payload.email:
            raise ValueError("Missing required fields")

        student = self.repo.add_student(
            Student(name=payload.name, email=payload.email, isAdmin=bool(payload.isAdmin))
        )
        logger.info("Student %s registered (admin=%s)", student.id, student.isAdmin)
        return student

    def get(self, student_id: str) -> Student:
        student = self.repo.get_student_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def is_admin(self, student_id: Optional[str]) -> bool:
        if not student_id:
            return False
        student = self.repo.get_student_by_id(student_id)
        return student.isAdmin if student else False
