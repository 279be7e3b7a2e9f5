"""
Сборка FastAPI-приложения.

Зависимости (репозитории, настройки) передаются в create_app явно;
сервис приложения хранится в app.state и выдается маршрутам через Depends.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from student_enrollment import __version__
from student_enrollment.application.repositories import (
    CourseRepository,
    StateRepository,
    StudentRepository,
)
from student_enrollment.application.services import StudentApplicationService
from student_enrollment.config import Settings, get_settings
from student_enrollment.infrastructure.observability import setup_logging
from student_enrollment.infrastructure.repositories import (
    InMemoryCourseRepository,
    InMemoryStateRepository,
    InMemoryStudentRepository,
)

from .error_handlers import register_error_handlers
from .routes import health_router, students_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    student_repo: Optional[StudentRepository] = None,
    course_repo: Optional[CourseRepository] = None,
    state_repo: Optional[StateRepository] = None,
) -> FastAPI:
    """Создает приложение и связывает его зависимости."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        logger.info("%s запущен", settings.app_title)
        yield
        logger.info("%s остановлен", settings.app_title)

    app = FastAPI(title=settings.app_title, version=__version__, lifespan=lifespan)
    app.state.student_service = StudentApplicationService(
        student_repo=student_repo or InMemoryStudentRepository(),
        course_repo=course_repo or InMemoryCourseRepository(),
        state_repo=state_repo or InMemoryStateRepository(),
    )

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(students_router, prefix=settings.api_prefix)
    register_error_handlers(app)

    return app
