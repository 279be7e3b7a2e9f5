"""
Инфраструктурный слой: репозитории в памяти и настройка логирования.
"""

from .observability import setup_logging
from .repositories import (
    InMemoryCourseRepository,
    InMemoryStateRepository,
    InMemoryStudentRepository,
)

__all__ = [
    "InMemoryCourseRepository",
    "InMemoryStateRepository",
    "InMemoryStudentRepository",
    "setup_logging",
]
