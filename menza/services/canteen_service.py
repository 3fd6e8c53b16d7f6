import logging
from typing import List, Optional

from menza.domain.errors import NotFoundError
from menza.domain.models import Canteen
from menza.dto.canteen_dto import CreateCanteenDTO, UpdateCanteenDTO
from menza.repository.repo import MemoryRepository
from menza.services.student_service import StudentService

logger = logging.getLogger(__name__)


class CanteenService:
    def __init__(self, repo: MemoryRepository):
        self.repo = repo
        self.students = StudentService(repo)

    def _require_admin(self, student_id: Optional[str]):
        if not self.students.is_admin(student_id):
            raise PermissionError("Unauthorized")

    def create(self, student_id: Optional[str], payload: CreateCanteenDTO) -> Canteen:
        self._require_admin(student_id)

        if not payload.name or not payload.location or not payload.capacity or payload.workingHours is None:
            raise ValueError("Missing fields")
        if payload.capacity < 0:
            raise ValueError("Capacity must be a positive integer")

        canteen = self.repo.add_canteen(Canteen(
            name=payload.name,
            location=payload.location,
            capacity=payload.capacity,
            workingHours=payload.workingHours,
        ))
        logger.info("Canteen %s created by %s", canteen.id, student_id)
        return canteen

    def list(self) -> List[Canteen]:
        return self.repo.get_all_canteens()

    def get(self, canteen_id: str) -> Canteen:
        canteen = self.repo.get_canteen_by_id(canteen_id)
        if not canteen:
            raise NotFoundError("Canteen not found")
        return canteen

    def update(self, student_id: Optional[str], canteen_id: str, payload: UpdateCanteenDTO) -> Canteen:
        self._require_admin(student_id)

        changes = {
            field: getattr(payload, field)
            for field in payload.model_fields_set
            if getattr(payload, field) is not None
        }
        if "capacity" in changes and changes["capacity"] <= 0:
            raise ValueError("Capacity must be a positive integer")

        updated = self.repo.update_canteen(canteen_id, changes)
        if not updated:
            raise NotFoundError("Canteen not found")

        logger.info("Canteen %s updated by %s: %s", canteen_id, student_id, sorted(changes))
        return updated

    def delete(self, student_id: Optional[str], canteen_id: str) -> None:
        self._require_admin(student_id)

        if not self.repo.delete_canteen(canteen_id):
            raise NotFoundError("Canteen not found")
        logger.info("Canteen %s deleted by %s; active reservations cancelled", canteen_id, student_id)
