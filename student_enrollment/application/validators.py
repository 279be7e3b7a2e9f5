"""
Валидаторы входящих запросов.

Каждый валидатор - набор правил для одного типа запроса. Правила не
останавливаются на первой ошибке: результат содержит ошибки всех полей
с путями вида ``addresses[1].city``. Проверка значений делегируется
фабрикам объектов-значений и сущностей, чтобы правила жили в домене.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from student_enrollment.domain import errors
from student_enrollment.domain.address import Address
from student_enrollment.domain.errors import DomainError, ErrorCode
from student_enrollment.domain.result import Result
from student_enrollment.domain.value_objects import Email, Phone

from .dtos import AddressDto, EditPersonalInfoRequest, EnrollRequest, RegisterRequest

NAME_MAX_LENGTH = 200
MIN_ADDRESSES = 1
MAX_ADDRESSES = 3


def validate_name(name: Optional[str]) -> Result[str]:
    """Имя обязательно и не длиннее NAME_MAX_LENGTH символов."""
    if name is None or not name.strip():
        return Result.failure(errors.required("name"))
    name = name.strip()
    if len(name) > NAME_MAX_LENGTH:
        return Result.failure(errors.too_long(NAME_MAX_LENGTH, "name"))
    return Result.success(name)


def validate_collection_size(
    items: Sequence,
    field: str,
    min_items: Optional[int] = None,
    max_items: Optional[int] = None,
) -> Result[None]:
    """Проверяет количество элементов списка."""
    problems: List[DomainError] = []
    if min_items is not None and len(items) < min_items:
        problems.append(
            DomainError(
                ErrorCode.INVALID_COLLECTION_SIZE,
                f"Список должен содержать не менее {min_items} элементов, "
                f"сейчас их {len(items)}.",
                field,
            )
        )
    if max_items is not None and len(items) > max_items:
        problems.append(
            DomainError(
                ErrorCode.INVALID_COLLECTION_SIZE,
                f"Список должен содержать не более {max_items} элементов, "
                f"сейчас их {len(items)}.",
                field,
            )
        )
    if problems:
        return Result.failure(*problems)
    return Result.success()


class AddressesValidator:
    """Правила для списка адресов: от 1 до 3 корректных адресов."""

    def __init__(self, all_states: Iterable[str]):
        self._all_states = list(all_states)

    def validate(
        self, addresses: Optional[List[Optional[AddressDto]]]
    ) -> Result[List[Address]]:
        if addresses is None:
            return Result.failure(errors.required("addresses"))

        size = validate_collection_size(
            addresses, "addresses", MIN_ADDRESSES, MAX_ADDRESSES
        )
        results: List[Result[Address]] = []
        for index, dto in enumerate(addresses):
            field = f"addresses[{index}]"
            if dto is None:
                results.append(Result.failure(errors.required(field)))
                continue
            results.append(self.to_address(dto).for_field(field))

        combined = Result.combine([size, *results])
        if combined.is_failure:
            return Result.failure(*combined.errors)
        return Result.success([result.value for result in results])

    def to_address(self, dto: AddressDto) -> Result[Address]:
        return Address.create(dto.street, dto.city, dto.state, dto.zip_code, self._all_states)


@dataclass(frozen=True)
class Registration:
    """Проверенные данные запроса регистрации."""

    name: str
    email: Email
    addresses: List[Address]
    phone: Optional[Phone] = None


@dataclass(frozen=True)
class PersonalInfo:
    """Проверенные данные запроса изменения личных данных."""

    name: str
    addresses: List[Address]


class RegisterRequestValidator:
    """Правила для запроса регистрации студента."""

    def __init__(self, all_states: Iterable[str]):
        self._addresses = AddressesValidator(all_states)

    def validate(self, request: RegisterRequest) -> Result[Registration]:
        name = validate_name(request.name)
        addresses = self._addresses.validate(request.addresses)
        email = Email.create(request.email).for_field("email")
        results: List[Result] = [name, addresses, email]
        # Телефон необязателен, но если передан - должен быть корректным
        phone: Optional[Result[Phone]] = None
        if request.phone is not None:
            phone = Phone.create(request.phone).for_field("phone")
            results.append(phone)

        combined = Result.combine(results)
        if combined.is_failure:
            return Result.failure(*combined.errors)
        return Result.success(
            Registration(
                name=name.value,
                email=email.value,
                addresses=addresses.value,
                phone=phone.value if phone else None,
            )
        )


class EditPersonalInfoRequestValidator:
    """Правила для запроса изменения личных данных."""

    def __init__(self, all_states: Iterable[str]):
        self._addresses = AddressesValidator(all_states)

    def validate(self, request: EditPersonalInfoRequest) -> Result[PersonalInfo]:
        name = validate_name(request.name)
        addresses = self._addresses.validate(request.addresses)
        combined = Result.combine([name, addresses])
        if combined.is_failure:
            return Result.failure(*combined.errors)
        return Result.success(PersonalInfo(name=name.value, addresses=addresses.value))


class EnrollRequestValidator:
    """Структурные правила запроса записи на курсы."""

    def validate(self, request: EnrollRequest) -> Result[None]:
        if not request.enrollments:
            return Result.failure(errors.required("enrollments"))

        problems: List[DomainError] = []
        for index, dto in enumerate(request.enrollments):
            field = f"enrollments[{index}]"
            if dto is None:
                problems.append(errors.required(field))
                continue
            if dto.course is None or not dto.course.strip():
                problems.append(errors.required(f"{field}.course"))
            if dto.grade is None or not dto.grade.strip():
                problems.append(errors.required(f"{field}.grade"))

        if problems:
            return Result.failure(*problems)
        return Result.success()
