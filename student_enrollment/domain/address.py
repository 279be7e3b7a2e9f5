"""
Почтовый адрес студента.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from . import errors
from .errors import DomainError
from .result import Result
from .value_objects import State

STREET_MAX_LENGTH = 100
CITY_MAX_LENGTH = 40
ZIP_CODE_MAX_LENGTH = 5


def _check_length(
    value: str, max_length: int, field: str, problems: List[DomainError]
) -> None:
    if not 1 <= len(value) <= max_length:
        problems.append(errors.invalid_length(1, max_length, field))


@dataclass(frozen=True)
class Address:
    """
    Почтовый адрес.
    Неизменяемый объект, сравнивается по значению.
    """

    street: str
    city: str
    state: State
    zip_code: str

    @classmethod
    def create(
        cls,
        street: Optional[str],
        city: Optional[str],
        state: Optional[str],
        zip_code: Optional[str],
        all_states: Iterable[str],
    ) -> Result["Address"]:
        """
        Создает адрес, проверяя все поля сразу.

        Штат проверяется первым, но его ошибка не прерывает проверку:
        в результат попадают ошибки всех полей.
        """
        state_result = State.create(state, all_states).for_field("state")
        problems: List[DomainError] = list(state_result.errors)

        street = (street or "").strip()
        city = (city or "").strip()
        zip_code = (zip_code or "").strip()

        _check_length(street, STREET_MAX_LENGTH, "street", problems)
        _check_length(city, CITY_MAX_LENGTH, "city", problems)
        _check_length(zip_code, ZIP_CODE_MAX_LENGTH, "zip_code", problems)

        if problems:
            return Result.failure(*problems)

        return Result.success(
            cls(street=street, city=city, state=state_result.value, zip_code=zip_code)
        )

    def __str__(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}"
