from abc import ABC, abstractmethod
from typing import List, Optional

from student_enrollment.domain.course import Course
from student_enrollment.domain.student import Student
from student_enrollment.domain.value_objects import Email


class RepositoryException(Exception):
    """Базовое исключение хранилища."""

    pass


class ConcurrencyException(RepositoryException):
    """Исключение при конфликте версий: агрегат изменен другим запросом."""

    pass


class DuplicateEmailException(RepositoryException):
    """Студент с таким email уже сохранен."""

    pass


class StudentRepository(ABC):
    """Абстрактный репозиторий для агрегата Student."""

    @abstractmethod
    def get_by_id(self, student_id: int) -> Optional[Student]:
        """Находит студента по идентификатору."""
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: Email) -> Optional[Student]:
        """Находит студента по email."""
        raise NotImplementedError

    @abstractmethod
    def save(self, student: Student) -> None:
        """
        Сохраняет состояние агрегата, назначая идентификатор новому студенту.

        Raises:
            DuplicateEmailException: новый студент с уже занятым email.
            ConcurrencyException: версия студента устарела.
        """
        raise NotImplementedError


class CourseRepository(ABC):
    """Справочник курсов."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Course]:
        raise NotImplementedError


class StateRepository(ABC):
    """Справочник допустимых кодов штатов."""

    @abstractmethod
    def get_all(self) -> List[str]:
        raise NotImplementedError
