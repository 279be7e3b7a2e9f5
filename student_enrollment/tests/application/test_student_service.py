"""
Тесты для сервиса приложения StudentApplicationService.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from student_enrollment.application.dtos import (
    AddressDto,
    CourseEnrollmentDto,
    EditPersonalInfoRequest,
    EnrollRequest,
    RegisterRequest,
)
from student_enrollment.application.services import StudentApplicationService
from student_enrollment.domain.course import Grade
from student_enrollment.domain.errors import ErrorCode
from student_enrollment.domain.value_objects import Phone
from student_enrollment.infrastructure.repositories import (
    InMemoryCourseRepository,
    InMemoryStateRepository,
    InMemoryStudentRepository,
)


@pytest.fixture
def service(all_states) -> StudentApplicationService:
    """Сервис приложения с чистым репозиторием студентов."""
    return StudentApplicationService(
        student_repo=InMemoryStudentRepository(),
        course_repo=InMemoryCourseRepository(),
        state_repo=InMemoryStateRepository(all_states),
    )


def register_request(**overrides) -> RegisterRequest:
    data = {
        "name": "  Alice  ",
        "email": " alice@example.com ",
        "addresses": [
            AddressDto(street="1 Main St", city="Albany", state="ny", zip_code="12207")
        ],
    }
    data.update(overrides)
    return RegisterRequest(**data)


def enroll_request(*pairs) -> EnrollRequest:
    return EnrollRequest(
        enrollments=[CourseEnrollmentDto(course=course, grade=grade) for course, grade in pairs]
    )


@pytest.fixture
def student_id(service) -> int:
    return service.register(register_request()).value.id


class TestRegister:
    """Тесты регистрации студента."""

    def test_register_saves_student(self, service):
        result = service.register(register_request(phone="2125551234"))

        assert result.is_success
        student = service.student_repo.get_by_id(result.value.id)
        assert student is not None
        assert student.name == "Alice"
        assert student.email.value == "alice@example.com"
        assert student.phone == Phone("2125551234")
        assert student.addresses[0].state.value == "NY"

    def test_ids_are_assigned_sequentially(self, service):
        first = service.register(register_request())
        second = service.register(register_request(email="bob@example.com"))
        assert (first.value.id, second.value.id) == (1, 2)

    def test_invalid_request_is_not_saved(self, service):
        result = service.register(
            register_request(email="", addresses=[AddressDto(state="XX")])
        )

        assert result.is_failure
        fields = [e.field for e in result.errors]
        assert "email" in fields
        assert "addresses[0].state" in fields
        assert service.student_repo.get_by_id(1) is None

    def test_email_must_be_unique(self, service):
        service.register(register_request())

        result = service.register(register_request(email="ALICE@example.com"))

        assert result.error.code == ErrorCode.EMAIL_TAKEN
        assert result.error.field == "email"

    def test_taken_email_is_reported_with_validation_errors(self, service):
        """Занятый email не скрывается за ошибками остальных полей."""
        service.register(register_request())

        result = service.register(register_request(phone="123"))

        assert [(e.field, e.code) for e in result.errors] == [
            ("phone", ErrorCode.INVALID_FORMAT),
            ("email", ErrorCode.EMAIL_TAKEN),
        ]

    def test_rejection_is_logged(self, service, caplog):
        with caplog.at_level(logging.WARNING):
            service.register(register_request(name=""))
        assert "register" in caplog.text

        record = next(r for r in caplog.records if r.levelno == logging.WARNING)
        assert record.operation == "register"
        assert record.error_codes == ["value.is.required"]

    def test_success_is_logged_with_student_id(self, service, caplog):
        with caplog.at_level(logging.INFO):
            student_id = service.register(register_request()).value.id

        record = caplog.records[-1]
        assert record.operation == "register"
        assert record.student_id == student_id


class TestEditPersonalInfo:
    """Тесты изменения личных данных."""

    def test_edit_replaces_name_and_addresses(self, service, student_id):
        request = EditPersonalInfoRequest(
            name=" Alice Smith ",
            addresses=[
                AddressDto(street="2 Oak Ave", city="Austin", state="TX", zip_code="73301"),
                AddressDto(street="3 Pine Rd", city="Fresno", state="CA", zip_code="93650"),
            ],
        )

        result = service.edit_personal_info(student_id, request)

        assert result.is_success
        student = service.student_repo.get_by_id(student_id)
        assert student.name == "Alice Smith"
        assert [a.city for a in student.addresses] == ["Austin", "Fresno"]

    def test_edit_unknown_student(self, service):
        result = service.edit_personal_info(
            99, EditPersonalInfoRequest(name="X", addresses=[])
        )
        assert result.error.code == ErrorCode.NOT_FOUND

    def test_invalid_edit_keeps_stored_data(self, service, student_id):
        result = service.edit_personal_info(
            student_id, EditPersonalInfoRequest(name="New", addresses=[])
        )

        assert result.error.code == ErrorCode.INVALID_COLLECTION_SIZE
        assert service.student_repo.get_by_id(student_id).name == "Alice"


class TestEnroll:
    """Тесты записи на курсы."""

    def test_enroll(self, service, student_id):
        result = service.enroll(student_id, enroll_request(("Calculus", "A"), ("chemistry", "b")))

        assert result.is_success
        student = service.student_repo.get_by_id(student_id)
        assert [(e.course.name, e.grade) for e in student.enrollments] == [
            ("Calculus", Grade.A),
            ("Chemistry", Grade.B),
        ]

    def test_enroll_unknown_student(self, service):
        result = service.enroll(42, enroll_request(("Calculus", "A")))
        assert result.error.code == ErrorCode.NOT_FOUND

    def test_unknown_course_and_grade_are_reported_together(self, service, student_id):
        result = service.enroll(student_id, enroll_request(("Astrology", "A"), ("Calculus", "Z")))

        assert [(e.field, e.code) for e in result.errors] == [
            ("enrollments[0].course", ErrorCode.NOT_FOUND),
            ("enrollments[1].grade", ErrorCode.INVALID_GRADE),
        ]

    def test_third_enrollment_is_rejected(self, service, student_id):
        service.enroll(student_id, enroll_request(("Calculus", "A"), ("Chemistry", "B")))

        result = service.enroll(student_id, enroll_request(("Literature", "C")))

        assert result.error.code == ErrorCode.TOO_MANY_ENROLLMENTS
        assert result.error.field == "enrollments[0]"

    def test_failed_request_does_not_save_partial_enrollments(self, service, student_id):
        result = service.enroll(student_id, enroll_request(("Calculus", "A"), ("Calculus", "B")))

        assert result.error.code == ErrorCode.DUPLICATE_ENROLLMENT
        assert result.error.field == "enrollments[1]"
        assert service.student_repo.get_by_id(student_id).enrollments == []


class TestGet:
    """Тесты чтения студента."""

    def test_get(self, service, student_id):
        service.enroll(student_id, enroll_request(("Calculus", "A")))

        dto = service.get(student_id).value

        assert dto.id == student_id
        assert dto.name == "Alice"
        assert dto.email == "alice@example.com"
        assert dto.phone is None
        assert dto.addresses[0].zip_code == "12207"
        assert [(e.course, e.grade) for e in dto.enrollments] == [("Calculus", "A")]

    def test_get_unknown_student(self, service):
        assert service.get(7).error.code == ErrorCode.NOT_FOUND


class SynchronizedStudentRepository(InMemoryStudentRepository):
    """
    Репозиторий, в котором параллельные запросы сначала оба читают данные,
    и только потом продолжают работу.
    """

    def __init__(self, parties: int = 2):
        super().__init__()
        self.barrier = threading.Barrier(parties, timeout=5)
        self.synchronized = False

    def get_by_id(self, student_id):
        student = super().get_by_id(student_id)
        if self.synchronized:
            self.barrier.wait()
        return student

    def get_by_email(self, email):
        student = super().get_by_email(email)
        if self.synchronized:
            self.barrier.wait()
        return student


def run_in_parallel(*calls):
    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
        return [future.result() for future in futures]


class TestConcurrentRequests:
    """Тесты параллельных запросов к одному студенту."""

    @pytest.fixture
    def repo(self):
        return SynchronizedStudentRepository()

    @pytest.fixture
    def service(self, repo, all_states):
        return StudentApplicationService(
            student_repo=repo,
            course_repo=InMemoryCourseRepository(),
            state_repo=InMemoryStateRepository(all_states),
        )

    def test_concurrent_enrollments_do_not_lose_updates(self, service, repo, student_id):
        repo.synchronized = True

        results = run_in_parallel(
            lambda: service.enroll(student_id, enroll_request(("Calculus", "A"))),
            lambda: service.enroll(student_id, enroll_request(("Chemistry", "B"))),
        )

        succeeded = [r for r in results if r.is_success]
        failed = [r for r in results if r.is_failure]
        assert len(succeeded) == 1
        assert [r.error.code for r in failed] == [ErrorCode.CONCURRENCY_CONFLICT]
        repo.synchronized = False
        assert len(repo.get_by_id(student_id).enrollments) == len(succeeded)

    def test_concurrent_edits_keep_one_version(self, service, repo, student_id):
        def edit(name):
            address = AddressDto(street="1 Main St", city="Albany", state="NY", zip_code="12207")
            request = EditPersonalInfoRequest(name=name, addresses=[address])
            return lambda: service.edit_personal_info(student_id, request)

        repo.synchronized = True
        results = run_in_parallel(edit("Bob"), edit("Carol"))
        repo.synchronized = False

        assert sorted(r.is_success for r in results) == [False, True]
        stored = repo.get_by_id(student_id)
        assert stored.version == 2
        assert stored.name in ("Bob", "Carol")

    def test_concurrent_registrations_with_same_email(self, service, repo):
        repo.synchronized = True

        results = run_in_parallel(
            lambda: service.register(register_request()),
            lambda: service.register(register_request(email="ALICE@example.com")),
        )

        assert sorted(r.is_success for r in results) == [False, True]
        failed = next(r for r in results if r.is_failure)
        assert failed.error.code == ErrorCode.EMAIL_TAKEN
        assert failed.error.field == "email"
        repo.synchronized = False
        assert repo.get_by_id(2) is None
