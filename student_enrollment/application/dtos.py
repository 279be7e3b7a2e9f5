"""
DTO (Data Transfer Objects) прикладного слоя.

Входящие DTO намеренно допускают отсутствующие поля: проверку значений
выполняют валидаторы запросов, чтобы вернуть клиенту все ошибки сразу.
В JSON поля передаются в camelCase.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from student_enrollment.domain.address import Address
from student_enrollment.domain.student import Enrollment, Student


class CamelModel(BaseModel):
    """Базовая модель с camelCase-алиасами."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# DTO для входящих данных


class AddressDto(CamelModel):
    """Почтовый адрес в запросе и ответе."""

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

    @classmethod
    def from_domain(cls, address: Address) -> "AddressDto":
        return cls(
            street=address.street,
            city=address.city,
            state=address.state.value,
            zip_code=address.zip_code,
        )


class RegisterRequest(CamelModel):
    """Запрос на регистрацию студента."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    addresses: Optional[List[Optional[AddressDto]]] = None


class EditPersonalInfoRequest(CamelModel):
    """Запрос на изменение личных данных."""

    name: Optional[str] = None
    addresses: Optional[List[Optional[AddressDto]]] = None


class CourseEnrollmentDto(CamelModel):
    """Курс и оценка."""

    course: Optional[str] = None
    grade: Optional[str] = None

    @classmethod
    def from_domain(cls, enrollment: Enrollment) -> "CourseEnrollmentDto":
        return cls(course=enrollment.course.name, grade=enrollment.grade.value)


class EnrollRequest(CamelModel):
    """Запрос на запись студента на курсы."""

    enrollments: Optional[List[Optional[CourseEnrollmentDto]]] = None


# DTO для исходящих данных


class RegisterResponse(CamelModel):
    id: int


class StudentDto(CamelModel):
    """DTO для представления студента."""

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    addresses: List[AddressDto]
    enrollments: List[CourseEnrollmentDto]

    @classmethod
    def from_domain(cls, student: Student) -> "StudentDto":
        """Создает DTO из доменной модели."""
        return cls(
            id=student.id,
            name=student.name,
            email=student.email.value,
            phone=student.phone.value if student.phone else None,
            addresses=[AddressDto.from_domain(a) for a in student.addresses],
            enrollments=[CourseEnrollmentDto.from_domain(e) for e in student.enrollments],
        )
