"""
Объекты-значения: Email, State, Phone.

Объекты создаются только через фабрику ``create``, которая возвращает Result.
Прямой вызов конструктора минует валидацию и предназначен для фабрик
и восстановления из хранилища.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from . import errors
from .errors import DomainError, ErrorCode
from .result import Result

EMAIL_MAX_LENGTH = 150
STATE_MAX_LENGTH = 2

_EMAIL_PATTERN = re.compile(r"^(.+)@(.+)$")
_PHONE_PATTERN = re.compile(r"^[2-9][0-9]{9}$")


@dataclass(frozen=True)
class Email:
    """
    Адрес электронной почты.
    Неизменяемый объект, сравнивается по значению.
    """

    value: str

    @classmethod
    def create(cls, raw: Optional[str]) -> Result["Email"]:
        if raw is None or not raw.strip():
            return Result.failure(errors.required())

        email = raw.strip()

        if len(email) > EMAIL_MAX_LENGTH:
            return Result.failure(errors.too_long(EMAIL_MAX_LENGTH))

        if not _EMAIL_PATTERN.match(email):
            return Result.failure(errors.invalid_format())

        return Result.success(cls(email))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class State:
    """
    Двухбуквенный код штата из справочника.
    Неизменяемый объект, сравнивается по значению.
    """

    value: str

    @classmethod
    def create(cls, raw: Optional[str], all_states: Iterable[str]) -> Result["State"]:
        if raw is None or not raw.strip():
            return Result.failure(errors.required())

        code = raw.strip().upper()

        if len(code) > STATE_MAX_LENGTH:
            return Result.failure(errors.too_long(STATE_MAX_LENGTH))

        allowed = {state.strip().upper() for state in all_states}
        if code not in allowed:
            return Result.failure(
                DomainError(
                    ErrorCode.INVALID_REFERENCE_VALUE,
                    f"Штат '{code}' отсутствует в справочнике.",
                )
            )

        return Result.success(cls(code))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Phone:
    """
    Десятизначный номер телефона (без кода страны).
    Неизменяемый объект, сравнивается по значению.
    """

    value: str

    @classmethod
    def create(cls, raw: Optional[str]) -> Result["Phone"]:
        if raw is None or not raw.strip():
            return Result.failure(errors.required())

        phone = raw.strip()

        if not _PHONE_PATTERN.match(phone):
            return Result.failure(errors.invalid_format())

        return Result.success(cls(phone))

    def __str__(self) -> str:
        return self.value
