"""
Сервис приложения для управления студентами.

Координирует сценарии: регистрация, изменение личных данных, запись на
курсы и чтение. Ожидаемые ошибки возвращаются как Result, исключения
наружу не выходят. Конфликты записи (устаревшая версия студента, email,
занятый параллельным запросом) тоже превращаются в ошибки Result.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from student_enrollment.domain import errors
from student_enrollment.domain.course import Course, Grade
from student_enrollment.domain.errors import DomainError
from student_enrollment.domain.result import Result
from student_enrollment.domain.student import Student
from student_enrollment.domain.value_objects import Email

from .dtos import (
    EditPersonalInfoRequest,
    EnrollRequest,
    RegisterRequest,
    RegisterResponse,
    StudentDto,
)
from .repositories import (
    ConcurrencyException,
    CourseRepository,
    DuplicateEmailException,
    StateRepository,
    StudentRepository,
)
from .validators import (
    EditPersonalInfoRequestValidator,
    EnrollRequestValidator,
    RegisterRequestValidator,
)


class StudentApplicationService:
    """Сервис приложения для работы со студентами."""

    def __init__(
        self,
        student_repo: StudentRepository,
        course_repo: CourseRepository,
        state_repo: StateRepository,
        logger: Optional[logging.Logger] = None,
    ):
        self.student_repo = student_repo
        self.course_repo = course_repo
        self.state_repo = state_repo
        self._logger = logger or logging.getLogger(__name__)

    def register(self, request: RegisterRequest) -> Result[RegisterResponse]:
        """
        Регистрирует нового студента.

        Занятость email проверяется вместе с остальными правилами, поэтому
        клиент получает все ошибки запроса за один ответ.
        """
        all_states = self.state_repo.get_all()

        validation = RegisterRequestValidator(all_states).validate(request)
        checked = Result.combine([validation, self._check_email_free(request.email)])
        if checked.is_failure:
            return self._reject("register", checked.errors)
        registration = validation.value

        student = Student(
            email=registration.email,
            name=registration.name,
            addresses=registration.addresses,
            phone=registration.phone,
        )
        try:
            self.student_repo.save(student)
        except DuplicateEmailException:
            # Email заняли между проверкой и сохранением
            return self._reject("register", [errors.email_taken(registration.email)])

        self._logger.info(
            "Студент %s зарегистрирован",
            student.id,
            extra={"operation": "register", "student_id": student.id},
        )
        return Result.success(RegisterResponse(id=student.id))

    def edit_personal_info(
        self, student_id: int, request: EditPersonalInfoRequest
    ) -> Result[None]:
        """Заменяет имя и адреса студента."""
        found = self._find_student(student_id)
        if found.is_failure:
            return self._reject("edit_personal_info", found.errors, student_id)
        student = found.value

        all_states = self.state_repo.get_all()
        validation = EditPersonalInfoRequestValidator(all_states).validate(request)
        if validation.is_failure:
            return self._reject("edit_personal_info", validation.errors, student_id)
        info = validation.value

        student.edit_personal_info(info.name, info.addresses)
        saved = self._save(student)
        if saved.is_failure:
            return self._reject("edit_personal_info", saved.errors, student_id)

        self._logger.info(
            "Личные данные студента %s изменены",
            student.id,
            extra={"operation": "edit_personal_info", "student_id": student.id},
        )
        return Result.success()

    def enroll(self, student_id: int, request: EnrollRequest) -> Result[None]:
        """
        Записывает студента на курсы из запроса.

        Сначала разрешаются все курсы и оценки, затем применяются правила
        агрегата. Студент сохраняется только если успешны все записи.
        Если студента успел изменить другой запрос, сохранение отклоняется
        с ошибкой CONCURRENCY_CONFLICT.
        """
        found = self._find_student(student_id)
        if found.is_failure:
            return self._reject("enroll", found.errors, student_id)
        student = found.value

        validation = EnrollRequestValidator().validate(request)
        if validation.is_failure:
            return self._reject("enroll", validation.errors, student_id)

        resolved: List[Tuple[Course, Grade]] = []
        problems: List[DomainError] = []
        for index, dto in enumerate(request.enrollments):
            field = f"enrollments[{index}]"
            course = self._find_course(dto.course).for_field(f"{field}.course")
            grade = Grade.parse(dto.grade).for_field(f"{field}.grade")
            problems.extend(course.errors)
            problems.extend(grade.errors)
            if course.is_success and grade.is_success:
                resolved.append((course.value, grade.value))

        if problems:
            return self._reject("enroll", problems, student_id)

        for index, (course, grade) in enumerate(resolved):
            enrollment = student.enroll(course, grade)
            problems.extend(enrollment.for_field(f"enrollments[{index}]").errors)

        if problems:
            return self._reject("enroll", problems, student_id)

        saved = self._save(student)
        if saved.is_failure:
            return self._reject("enroll", saved.errors, student_id)

        self._logger.info(
            "Студент %s записан на курсы: %s",
            student.id,
            ", ".join(course.name for course, _ in resolved),
            extra={"operation": "enroll", "student_id": student.id},
        )
        return Result.success()

    def get(self, student_id: int) -> Result[StudentDto]:
        """Возвращает информацию о студенте."""
        return self._find_student(student_id).map(StudentDto.from_domain)

    def _find_student(self, student_id: int) -> Result[Student]:
        student = self.student_repo.get_by_id(student_id)
        if student is None:
            return Result.failure(errors.not_found("Студент", student_id))
        return Result.success(student)

    def _find_course(self, name: str) -> Result[Course]:
        course = self.course_repo.get_by_name(name)
        if course is None:
            return Result.failure(errors.not_found("Курс", name.strip()))
        return Result.success(course)

    def _check_email_free(self, raw_email: Optional[str]) -> Result[None]:
        # Некорректный email уже отклонен валидатором запроса
        email = Email.create(raw_email)
        if email.is_success and self.student_repo.get_by_email(email.value) is not None:
            return Result.failure(errors.email_taken(email.value))
        return Result.success()

    def _save(self, student: Student) -> Result[None]:
        try:
            self.student_repo.save(student)
        except ConcurrencyException:
            return Result.failure(errors.concurrency_conflict("Студент", student.id))
        return Result.success()

    def _reject(
        self,
        operation: str,
        problems: Iterable[DomainError],
        student_id: Optional[int] = None,
    ) -> Result:
        problems = list(problems)
        self._logger.warning(
            "Операция %s отклонена: %s",
            operation,
            "; ".join(str(problem) for problem in problems),
            extra={
                "operation": operation,
                "student_id": student_id,
                "error_codes": [problem.code.value for problem in problems],
            },
        )
        return Result.failure(*problems)
