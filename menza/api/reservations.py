from fastapi import APIRouter, Depends, HTTPException

from menza.api.dependencies import get_reservation_service
from menza.domain.errors import NotFoundError, ReservationRejected
from menza.domain.models import Reservation
from menza.dto.reservation_dto import CreateReservationDTO
from menza.services.reservation_service import ReservationService

router = APIRouter()


@router.post("", response_model=Reservation, status_code=201)
def create_reservation(
    payload: CreateReservationDTO,
    service: ReservationService = Depends(get_reservation_service),
):
    try:
        return service.create_reservation(payload)
    except ReservationRejected as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{reservation_id}", response_model=Reservation)
def cancel_reservation(reservation_id: str, service: ReservationService = Depends(get_reservation_service)):
    try:
        return service.cancel_reservation(reservation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
