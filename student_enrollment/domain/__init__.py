"""
Доменный слой: объекты-значения, сущности и агрегат Student.
"""

from .address import Address
from .course import Course, Grade
from .errors import DomainError, ErrorCode
from .result import Result, ResultUnwrapError
from .student import Enrollment, Student
from .value_objects import Email, Phone, State

__all__ = [
    "Address",
    "Course",
    "DomainError",
    "Email",
    "Enrollment",
    "ErrorCode",
    "Grade",
    "Phone",
    "Result",
    "ResultUnwrapError",
    "State",
    "Student",
]
