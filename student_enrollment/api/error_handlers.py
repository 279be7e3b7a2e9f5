"""
Преобразование ошибок в HTTP-ответы.

Все ответы об ошибках имеют одну форму:
``{"error": {"code", "message", "category", "details": [...]}}``.
Доменные ошибки приходят как Result и превращаются в ответ явно,
исключения перехватываются только для ошибок фреймворка и непредвиденных сбоев.
"""

import logging
from typing import Iterable, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from student_enrollment.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

_BUSINESS_RULE_CODES = {
    ErrorCode.TOO_MANY_ENROLLMENTS,
    ErrorCode.DUPLICATE_ENROLLMENT,
    ErrorCode.EMAIL_TAKEN,
}


def failure_response(errors: Iterable[DomainError]) -> JSONResponse:
    """404 при NOT_FOUND, 409 при конфликте версий, иначе 400."""
    problems: List[DomainError] = list(errors)
    codes = {problem.code for problem in problems}

    if ErrorCode.NOT_FOUND in codes:
        status_code = status.HTTP_404_NOT_FOUND
        code, category = "RESOURCE_NOT_FOUND", "resource_not_found"
    elif ErrorCode.CONCURRENCY_CONFLICT in codes:
        status_code = status.HTTP_409_CONFLICT
        code, category = "CONCURRENCY_CONFLICT", "conflict"
    elif codes <= _BUSINESS_RULE_CODES:
        status_code = status.HTTP_400_BAD_REQUEST
        code, category = "BUSINESS_RULE_VIOLATION", "business_rule"
    else:
        status_code = status.HTTP_400_BAD_REQUEST
        code, category = "VALIDATION_ERROR", "validation"

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": (
                    problems[0].message
                    if len(problems) == 1
                    else "Некорректные данные запроса"
                ),
                "category": category,
                "details": [
                    {
                        "field": problem.field,
                        "code": problem.code.value,
                        "message": problem.message,
                    }
                    for problem in problems
                ],
            }
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Регистрирует глобальные обработчики ошибок."""
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Некорректный JSON или неверные типы полей."""
        logger.warning(
            "Некорректный запрос %s: %s",
            request.url.path,
            exc.errors(),
            extra={"path": request.url.path, "status_code": 400},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Некорректные данные запроса",
                    "category": "validation",
                    "details": [
                        {
                            "field": ".".join(str(loc) for loc in e["loc"]),
                            "code": e["type"],
                            "message": e["msg"],
                        }
                        for e in exc.errors()
                    ],
                }
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Непредвиденная ошибка: детали пишутся в журнал, но не клиенту."""
        logger.error(
            "Необработанное исключение на %s: %s",
            request.url.path,
            exc,
            exc_info=True,
            extra={"path": request.url.path, "status_code": 500},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Непредвиденная ошибка сервера",
                    "category": "internal",
                    "details": [],
                }
            },
        )
