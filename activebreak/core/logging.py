import logging
import sys
from logging.config import dictConfig

from activebreak.config import settings

CTX_FIELDS = ("user_id", "rule_id", "activity_type_id")


def setup_logging() -> None:
    """Базовая настройка логирования всего приложения."""
    level = settings.log_level.upper()

    if settings.log_json:
        formatter = {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "fmt": (
                "%(asctime)s %(levelname)s %(name)s %(message)s "
                "%(user_id)s %(rule_id)s %(activity_type_id)s"
            ),
            "json_ensure_ascii": False,
        }
    else:
        formatter = {
            "format": (
                "%(asctime)s | %(levelname)5s | %(name)s | %(message)s "
                "| user=%(user_id)s rule=%(rule_id)s act=%(activity_type_id)s"
            ),
        }

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"ctx": {"()": CtxFilter}},
        "formatters": {"default": formatter},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "default",
                "filters": ["ctx"],
            }
        },
        "root": {"level": level, "handlers": ["stdout"]},
        "loggers": {
            # Для SQLAlchemy можно включить подробности при отладке:
            "sqlalchemy.engine": {"level": settings.log_sql.upper()},
            "aiogram": {"level": settings.log_aiogram.upper()},
            # apscheduler болтлив на INFO (каждый запуск джобы)
            "apscheduler": {"level": "WARNING"},
            "activebreak": {"level": level},
        },
    })


class CtxFilter(logging.Filter):
    """Добавляет безопасные поля, чтобы форматтер не падал, когда нет extra."""
    def filter(self, record: logging.LogRecord) -> bool:
        for k in CTX_FIELDS:
            if not hasattr(record, k):
                setattr(record, k, "-")
        return True
