"""
Прикладной слой: DTO, валидаторы запросов, интерфейсы репозиториев
и сервис приложения.
"""

from .services import StudentApplicationService

__all__ = ["StudentApplicationService"]
