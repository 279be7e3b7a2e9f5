from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .address import Address
from .course import Course, Grade
from .errors import DomainError, ErrorCode
from .result import Result
from .value_objects import Email, Phone

MAX_ENROLLMENTS = 2


@dataclass(frozen=True)
class Enrollment:
    """Запись студента на курс с оценкой. Создается только через Student.enroll."""

    student: Student = field(repr=False, compare=False)
    course: Course
    grade: Grade


class Student:
    """
    Агрегат 'Студент'.

    Идентификатор назначается репозиторием при первом сохранении.
    Email не меняется после создания. Версия 0 означает, что студент
    еще не сохранен.
    """

    def __init__(
        self,
        email: Email,
        name: str,
        addresses: Sequence[Address],
        phone: Optional[Phone] = None,
        student_id: Optional[int] = None,
        version: int = 0,
    ):
        self.id: Optional[int] = student_id
        # Для оптимистичной блокировки: увеличивается репозиторием при save
        self.version = version
        self._email = email
        self.phone = phone
        self._enrollments: List[Enrollment] = []
        self.edit_personal_info(name, addresses)

    @property
    def email(self) -> Email:
        return self._email

    @property
    def name(self) -> str:
        return self._name

    @property
    def addresses(self) -> Tuple[Address, ...]:
        return self._addresses

    @property
    def enrollments(self) -> List[Enrollment]:
        return list(self._enrollments)

    def edit_personal_info(self, name: str, addresses: Sequence[Address]) -> None:
        self._name = name
        self._addresses = tuple(addresses)

    def enroll(self, course: Course, grade: Grade) -> Result[Enrollment]:
        if len(self._enrollments) >= MAX_ENROLLMENTS:
            return Result.failure(
                DomainError(
                    ErrorCode.TOO_MANY_ENROLLMENTS,
                    f"Нельзя иметь больше {MAX_ENROLLMENTS} записей на курсы.",
                )
            )

        if any(enrollment.course == course for enrollment in self._enrollments):
            return Result.failure(
                DomainError(
                    ErrorCode.DUPLICATE_ENROLLMENT,
                    f"Студент '{self.name}' уже записан на курс '{course.name}'.",
                )
            )

        enrollment = Enrollment(student=self, course=course, grade=grade)
        self._enrollments.append(enrollment)
        return Result.success(enrollment)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name='{self.name}', email='{self.email}')>"
