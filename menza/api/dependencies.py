from datetime import datetime
from typing import Callable

from fastapi import Depends

from menza.repository.repo import MemoryRepository, repo
from menza.services.availability_service import AvailabilityService
from menza.services.canteen_service import CanteenService
from menza.services.reservation_service import ReservationService
from menza.services.student_service import StudentService


def get_repo() -> MemoryRepository:
    return repo


def get_clock() -> Callable[[], datetime]:
    return datetime.now


def get_student_service(store: MemoryRepository = Depends(get_repo)) -> StudentService:
    return StudentService(store)


def get_canteen_service(store: MemoryRepository = Depends(get_repo)) -> CanteenService:
    return CanteenService(store)


def get_availability_service(store: MemoryRepository = Depends(get_repo)) -> AvailabilityService:
    return AvailabilityService(store)


def get_reservation_service(
    store: MemoryRepository = Depends(get_repo),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ReservationService:
    return ReservationService(store, clock)
