from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import DomainError, ErrorCode
from .result import Result


class Grade(str, Enum):
    """Оценка за курс."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Result[Grade]:
        """Разбирает оценку из текста без учета регистра."""
        text = (raw or "").strip().upper()
        try:
            return Result.success(cls[text])
        except KeyError:
            return Result.failure(
                DomainError(ErrorCode.INVALID_GRADE, f"Неизвестная оценка '{raw}'.")
            )


@dataclass
class Course:
    """Сущность 'Курс'. Справочные данные, ищется по названию."""

    id: int
    name: str
    credits: int

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if not isinstance(other, Course):
            return NotImplemented
        return self.id == other.id
