from fastapi import APIRouter, Depends, HTTPException

from menza.api.dependencies import get_student_service
from menza.domain.errors import NotFoundError
from menza.domain.models import Student
from menza.dto.student_dto import CreateStudentDTO
from menza.services.student_service import StudentService

router = APIRouter()


@router.post("", response_model=Student, status_code=201)
def create_student(payload: CreateStudentDTO, service: StudentService = Depends(get_student_service)):
    try:
        return service.register(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{student_id}", response_model=Student)
def get_student(student_id: str, service: StudentService = Depends(get_student_service)):
    try:
        return service.get(student_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
