"""
Результат операции: значение либо непустой список ошибок.
"""

from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

from .errors import DomainError

T = TypeVar("T")
U = TypeVar("U")


class ResultUnwrapError(ValueError):
    """Попытка прочитать значение неуспешного результата."""

    def __init__(self, errors: Tuple[DomainError, ...]):
        details = "; ".join(str(error) for error in errors)
        super().__init__(f"Результат содержит ошибки: {details}")
        self.errors = errors


class Result(Generic[T]):
    """
    Успех со значением или неудача со списком ошибок.
    Неизменяемый объект, сравнивается по значению.
    """

    __slots__ = ("_value", "_errors")

    def __init__(self, value: Optional[T], errors: Tuple[DomainError, ...]):
        self._value = value
        self._errors = errors

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(value, ())

    @classmethod
    def failure(cls, *errors: DomainError) -> "Result[T]":
        if not errors:
            raise ValueError("Неуспешный результат должен содержать хотя бы одну ошибку.")
        return cls(None, tuple(errors))

    @classmethod
    def combine(cls, results: Iterable["Result"]) -> "Result[None]":
        """Объединяет результаты: успех, только если успешны все."""
        errors: List[DomainError] = []
        for result in results:
            errors.extend(result.errors)
        if errors:
            return cls.failure(*errors)
        return cls.success()

    @property
    def is_success(self) -> bool:
        return not self._errors

    @property
    def is_failure(self) -> bool:
        return bool(self._errors)

    @property
    def value(self) -> T:
        if self._errors:
            raise ResultUnwrapError(self._errors)
        return self._value

    @property
    def errors(self) -> Tuple[DomainError, ...]:
        return self._errors

    @property
    def error(self) -> DomainError:
        """Первая ошибка неуспешного результата."""
        if not self._errors:
            raise ValueError("Успешный результат не содержит ошибок.")
        return self._errors[0]

    def map(self, func: Callable[[T], U]) -> "Result[U]":
        if self._errors:
            return Result(None, self._errors)
        return Result.success(func(self._value))

    def for_field(self, name: str) -> "Result[T]":
        """Привязывает все ошибки к полю запроса."""
        if not self._errors:
            return self
        return Result(None, tuple(error.for_field(name) for error in self._errors))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._value == other._value and self._errors == other._errors

    def __hash__(self) -> int:
        return hash((self._value, self._errors))

    def __repr__(self) -> str:
        if self._errors:
            return f"<Result.failure({list(self._errors)})>"
        return f"<Result.success({self._value!r})>"
