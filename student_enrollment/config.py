"""
Настройки приложения из переменных окружения (префикс STUDENTS_) и файла .env.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки приложения."""

    model_config = SettingsConfigDict(
        env_prefix="STUDENTS_", env_file=".env", case_sensitive=False
    )

    app_title: str = "Student Enrollment API"
    api_prefix: str = "/api"

    host: str = "127.0.0.1"
    port: int = 8000

    # Логирование
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Префикс начинается с '/' и не заканчивается им: '/api'."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("text", "json"):
            raise ValueError("Формат логов должен быть 'text' или 'json'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
