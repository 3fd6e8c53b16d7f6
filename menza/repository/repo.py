import threading
import uuid
from typing import Callable, List, Optional

from menza.domain.models import ACTIVE, CANCELLED, Canteen, Reservation, Student


class MemoryRepository:
    """Flat in-memory collections; nothing survives a restart.

    `lock` serializes read-check-write sequences (reservation admission,
    cancellation, canteen deletion) since FastAPI runs sync endpoints on a
    thread pool.
    """

    def __init__(self):
        self.students: List[Student] = []
        self.canteens: List[Canteen] = []
        self.reservations: List[Reservation] = []
        self.lock = threading.RLock()

    def add_student(self, data: Student) -> Student:
        if self.get_student_by_email(data.email):
            raise ValueError("Email already exists")

        student = data.model_copy(update={"id": str(uuid.uuid4())})
        self.students.append(student)
        return student

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    def get_student_by_email(self, email: str) -> Optional[Student]:
        return next((s for s in self.students if s.email == email), None)

    def add_canteen(self, data: Canteen) -> Canteen:
        canteen = data.model_copy(update={"id": str(uuid.uuid4())})
        self.canteens.append(canteen)
        return canteen

    def get_canteen_by_id(self, canteen_id: str) -> Optional[Canteen]:
        return next((c for c in self.canteens if c.id == canteen_id), None)

    def get_all_canteens(self) -> List[Canteen]:
        return list(self.canteens)

    def update_canteen(self, canteen_id: str, data: dict) -> Optional[Canteen]:
        for index, existing in enumerate(self.canteens):
            if existing.id == canteen_id:
                updated = existing.model_copy(update=data)
                self.canteens[index] = updated
                return updated
        return None

    def delete_canteen(self, canteen_id: str) -> bool:
        with self.lock:
            existing = self.get_canteen_by_id(canteen_id)
            if not existing:
                return False
            self.canteens.remove(existing)
            self.cancel_reservations_by_canteen_id(canteen_id)
            return True

    def add_reservation(self, data: Reservation) -> Reservation:
        reservation = data.model_copy(update={"id": str(uuid.uuid4())})
        self.reservations.append(reservation)
        return reservation

    def get_reservation_by_id(self, reservation_id: str) -> Optional[Reservation]:
        return next((r for r in self.reservations if r.id == reservation_id), None)

    def find_reservations(self, predicate: Callable[[Reservation], bool]) -> List[Reservation]:
        return [r for r in self.reservations if predicate(r)]

    def get_active_reservations_by_student_id(self, student_id: str) -> List[Reservation]:
        return self.find_reservations(lambda r: r.studentId == student_id and r.status == ACTIVE)

    def get_active_reservations_by_canteen_id(self, canteen_id: str) -> List[Reservation]:
        return self.find_reservations(lambda r: r.canteenId == canteen_id and r.status == ACTIVE)

    def cancel_reservation(self, reservation_id: str) -> Optional[Reservation]:
        with self.lock:
            reservation = self.get_reservation_by_id(reservation_id)
            if not reservation:
                return None
            reservation.status = CANCELLED
            return reservation

    def cancel_reservations_by_canteen_id(self, canteen_id: str) -> int:
        count = 0
        for res in self.get_active_reservations_by_canteen_id(canteen_id):
            res.status = CANCELLED
            count += 1
        return count

    def clear_all(self):
        with self.lock:
            self.students.clear()
            self.canteens.clear()
            self.reservations.clear()


repo = MemoryRepository()
