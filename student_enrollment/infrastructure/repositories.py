"""
Реализации репозиториев в памяти.

Репозиторий студентов хранит и выдает копии агрегатов: изменения,
не прошедшие через save, не попадают в хранилище. Запись идет под
блокировкой с проверкой версии, поэтому из двух запросов, прочитавших
одну и ту же версию студента, сохранится только первый.
"""

import copy
import itertools
import logging
import threading
from typing import Dict, Iterable, List, Optional

from student_enrollment.application.repositories import (
    ConcurrencyException,
    CourseRepository,
    DuplicateEmailException,
    StateRepository,
    StudentRepository,
)
from student_enrollment.domain.course import Course
from student_enrollment.domain.student import Student
from student_enrollment.domain.value_objects import Email

logger = logging.getLogger(__name__)

US_STATES = [
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FL",
    "GA", "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME",
    "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH",
    "NJ", "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI",
    "SC", "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI",
    "WY",
]

SAMPLE_COURSES = [
    Course(id=1, name="Calculus", credits=3),
    Course(id=2, name="Chemistry", credits=3),
    Course(id=3, name="Literature", credits=4),
    Course(id=4, name="Trigonometry", credits=4),
    Course(id=5, name="Microeconomics", credits=3),
]


class InMemoryStudentRepository(StudentRepository):
    """Реализация репозитория студентов в памяти."""

    def __init__(self) -> None:
        self._students: Dict[int, Student] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_by_id(self, student_id: int) -> Optional[Student]:
        logger.debug("Поиск студента %s в репозитории", student_id)
        with self._lock:
            student = self._students.get(student_id)
            return copy.deepcopy(student) if student is not None else None

    def get_by_email(self, email: Email) -> Optional[Student]:
        with self._lock:
            student = self._find_by_email(email)
            return copy.deepcopy(student) if student is not None else None

    def save(self, student: Student) -> None:
        """Сохраняет или обновляет студента, назначая ID новому."""
        with self._lock:
            if student.id is None:
                # Проверка уникальности email и вставка - одна операция
                if self._find_by_email(student.email) is not None:
                    raise DuplicateEmailException(
                        f"Email '{student.email}' уже используется"
                    )
                student.id = next(self._ids)
            else:
                stored = self._students.get(student.id)
                stored_version = stored.version if stored is not None else 0
                if stored_version != student.version:
                    raise ConcurrencyException(
                        f"Студент {student.id}: ожидалась версия {student.version}, "
                        f"в хранилище {stored_version}"
                    )
            student.version += 1
            logger.debug(
                "Сохранение студента %s (версия %s) в репозиторий",
                student.id,
                student.version,
            )
            self._students[student.id] = copy.deepcopy(student)

    def _find_by_email(self, email: Email) -> Optional[Student]:
        for student in self._students.values():
            if student.email.value.lower() == email.value.lower():
                return student
        return None


class InMemoryCourseRepository(CourseRepository):
    """Справочник курсов в памяти. Поиск по названию без учета регистра."""

    def __init__(self, courses: Optional[Iterable[Course]] = None) -> None:
        self._courses: Dict[str, Course] = {}
        for course in SAMPLE_COURSES if courses is None else courses:
            self._courses[course.name.casefold()] = course

    def get_by_name(self, name: str) -> Optional[Course]:
        return self._courses.get((name or "").strip().casefold())


class InMemoryStateRepository(StateRepository):
    """Справочник кодов штатов в памяти."""

    def __init__(self, states: Optional[Iterable[str]] = None) -> None:
        self._states: List[str] = list(US_STATES if states is None else states)

    def get_all(self) -> List[str]:
        return list(self._states)
