"""Запуск API: python -m student_enrollment"""

import uvicorn

from student_enrollment.api import create_app
from student_enrollment.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
