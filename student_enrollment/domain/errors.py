"""
Ошибки валидации доменного слоя.

Ошибка - это значение, а не исключение: фабрики возвращают её внутри Result,
а прикладной слой собирает все ошибки запроса в один список.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Стабильные машиночитаемые коды ошибок."""

    REQUIRED = "value.is.required"
    TOO_LONG = "value.is.too.long"
    INVALID_FORMAT = "value.is.invalid"
    INVALID_REFERENCE_VALUE = "value.not.in.reference.list"
    INVALID_LENGTH = "value.has.invalid.length"
    INVALID_COLLECTION_SIZE = "collection.has.invalid.size"
    TOO_MANY_ENROLLMENTS = "student.too.many.enrollments"
    DUPLICATE_ENROLLMENT = "student.duplicate.enrollment"
    INVALID_GRADE = "grade.is.invalid"
    NOT_FOUND = "record.not.found"
    EMAIL_TAKEN = "email.is.taken"
    CONCURRENCY_CONFLICT = "record.was.modified"


@dataclass(frozen=True)
class DomainError:
    """Ошибка с кодом, сообщением и (необязательно) путём к полю."""

    code: ErrorCode
    message: str
    field: Optional[str] = None

    def for_field(self, name: str) -> "DomainError":
        """Возвращает копию ошибки, привязанную к полю запроса.

        Если ошибка уже относится к вложенному полю, путь дополняется:
        ``street`` внутри ``addresses[0]`` превращается в ``addresses[0].street``.
        """
        path = f"{name}.{self.field}" if self.field else name
        return replace(self, field=path)

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


# Фабрики для часто используемых ошибок


def required(field: Optional[str] = None) -> DomainError:
    return DomainError(ErrorCode.REQUIRED, "Значение обязательно.", field)


def too_long(max_length: int, field: Optional[str] = None) -> DomainError:
    return DomainError(
        ErrorCode.TOO_LONG,
        f"Значение длиннее {max_length} символов.",
        field,
    )


def invalid_format(field: Optional[str] = None) -> DomainError:
    return DomainError(ErrorCode.INVALID_FORMAT, "Значение имеет неверный формат.", field)


def invalid_length(
    min_length: int, max_length: int, field: Optional[str] = None
) -> DomainError:
    return DomainError(
        ErrorCode.INVALID_LENGTH,
        f"Длина значения должна быть от {min_length} до {max_length} символов.",
        field,
    )


def not_found(entity: str, key: object, field: Optional[str] = None) -> DomainError:
    return DomainError(ErrorCode.NOT_FOUND, f"{entity} '{key}' не найден.", field)


def email_taken(email: object, field: Optional[str] = "email") -> DomainError:
    return DomainError(ErrorCode.EMAIL_TAKEN, f"Email '{email}' уже используется.", field)


def concurrency_conflict(entity: str, key: object) -> DomainError:
    return DomainError(
        ErrorCode.CONCURRENCY_CONFLICT,
        f"{entity} '{key}' был изменен другим запросом. Повторите операцию.",
    )
