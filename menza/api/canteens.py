from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response

from menza.api.dependencies import get_availability_service, get_canteen_service
from menza.domain.errors import NotFoundError
from menza.domain.models import Canteen, CanteenStatus
from menza.dto.canteen_dto import CreateCanteenDTO, UpdateCanteenDTO
from menza.dto.status_dto import StatusQueryDTO
from menza.services.availability_service import AvailabilityService
from menza.services.canteen_service import CanteenService

router = APIRouter()


def status_query(
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    startTime: Optional[str] = None,
    endTime: Optional[str] = None,
    duration: Optional[str] = None,
) -> StatusQueryDTO:
    return StatusQueryDTO(
        startDate=startDate,
        endDate=endDate,
        startTime=startTime,
        endTime=endTime,
        duration=duration,
    )


@router.post("", response_model=Canteen, status_code=201)
def create_canteen(
    payload: CreateCanteenDTO,
    student_id: Optional[str] = Header(default=None, alias="studentId"),
    service: CanteenService = Depends(get_canteen_service),
):
    try:
        return service.create(student_id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=List[Canteen])
def list_canteens(service: CanteenService = Depends(get_canteen_service)):
    return service.list()


@router.get("/status", response_model=List[CanteenStatus])
def get_global_status(
    query: StatusQueryDTO = Depends(status_query),
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.global_status(query)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{canteen_id}", response_model=Canteen)
def get_canteen(canteen_id: str, service: CanteenService = Depends(get_canteen_service)):
    try:
        return service.get(canteen_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{canteen_id}/status", response_model=CanteenStatus)
def get_canteen_status(
    canteen_id: str,
    query: StatusQueryDTO = Depends(status_query),
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.canteen_status(canteen_id, query)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{canteen_id}", response_model=Canteen)
def update_canteen(
    canteen_id: str,
    payload: UpdateCanteenDTO,
    student_id: Optional[str] = Header(default=None, alias="studentId"),
    service: CanteenService = Depends(get_canteen_service),
):
    try:
        return service.update(student_id, canteen_id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{canteen_id}", status_code=204)
def delete_canteen(
    canteen_id: str,
    student_id: Optional[str] = Header(default=None, alias="studentId"),
    service: CanteenService = Depends(get_canteen_service),
):
    try:
        service.delete(student_id, canteen_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
