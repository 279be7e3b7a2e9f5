"""
Общие фикстуры для тестов.
"""

import pytest

from student_enrollment.domain.address import Address
from student_enrollment.domain.course import Course
from student_enrollment.domain.student import Student
from student_enrollment.domain.value_objects import Email

STATES = ["NY", "CA", "TX"]


@pytest.fixture
def all_states():
    return list(STATES)


@pytest.fixture
def calculus():
    return Course(id=1, name="Calculus", credits=3)


@pytest.fixture
def chemistry():
    return Course(id=2, name="Chemistry", credits=3)


@pytest.fixture
def literature():
    return Course(id=3, name="Literature", credits=4)


@pytest.fixture
def address(all_states):
    return Address.create("1 Main St", "Albany", "NY", "12207", all_states).value


@pytest.fixture
def student(address):
    """Новый студент без записей на курсы."""
    return Student(Email.create("alice@example.com").value, "Alice", [address])
