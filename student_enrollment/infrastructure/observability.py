"""
Настройка логирования.

JSON-формат для эксплуатации, текстовый - для локальной разработки.
setup_logging вызывается один раз при старте приложения.

Сервис студентов передает контекст операции через ``extra``:
``operation``, ``student_id``, ``error_codes``. Обработчики HTTP-ошибок
добавляют ``path`` и ``status_code``. JSONFormatter выводит эти поля
отдельными ключами, чтобы журнал можно было фильтровать по ним.
"""

import json
import logging
from datetime import datetime, timezone

_HANDLER_NAME = "student_enrollment"

CONTEXT_FIELDS = ("operation", "student_id", "error_codes", "path", "status_code")


class JSONFormatter(logging.Formatter):
    """Форматирует записи журнала как JSON с полями контекста операции."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log[key] = value
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextFormatter(logging.Formatter):
    """Текстовый формат: поля контекста дописываются в конец строки."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )
        return f"{line} [{context}]" if context else line


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Настраивает корневой логгер. Повторный вызов заменяет обработчик."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            ContextFormatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        )
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
