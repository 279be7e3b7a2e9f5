"""
HTTP-маршруты. Тонкий слой: разбор запроса, вызов сервиса приложения,
перевод Result в ответ.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from student_enrollment import __version__
from student_enrollment.application.dtos import (
    EditPersonalInfoRequest,
    EnrollRequest,
    RegisterRequest,
    RegisterResponse,
    StudentDto,
)
from student_enrollment.application.services import StudentApplicationService

from .error_handlers import failure_response

health_router = APIRouter(prefix="/health", tags=["health"])
students_router = APIRouter(prefix="/students", tags=["students"])


def get_student_service(request: Request) -> StudentApplicationService:
    """Сервис создается в create_app и хранится в app.state."""
    return request.app.state.student_service


@health_router.get("", status_code=status.HTTP_200_OK)
def health_check(request: Request):
    return {"status": "healthy", "service": request.app.title, "version": __version__}


@students_router.post("", response_model=RegisterResponse)
def register(
    body: RegisterRequest,
    service: StudentApplicationService = Depends(get_student_service),
):
    result = service.register(body)
    if result.is_failure:
        return failure_response(result.errors)
    return result.value


@students_router.put("/{student_id}")
def edit_personal_info(
    student_id: int,
    body: EditPersonalInfoRequest,
    service: StudentApplicationService = Depends(get_student_service),
):
    result = service.edit_personal_info(student_id, body)
    if result.is_failure:
        return failure_response(result.errors)
    return Response(status_code=status.HTTP_200_OK)


@students_router.post("/{student_id}/enrollments")
def enroll(
    student_id: int,
    body: EnrollRequest,
    service: StudentApplicationService = Depends(get_student_service),
):
    result = service.enroll(student_id, body)
    if result.is_failure:
        return failure_response(result.errors)
    return Response(status_code=status.HTTP_200_OK)


@students_router.get("/{student_id}", response_model=StudentDto)
def get_student(
    student_id: int,
    service: StudentApplicationService = Depends(get_student_service),
):
    result = service.get(student_id)
    if result.is_failure:
        return failure_response(result.errors)
    return result.value
