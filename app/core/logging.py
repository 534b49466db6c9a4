# app/core/logging.py
import logging
from logging.config import dictConfig

_configured = False


def setup_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return
    if level is None:
        from app.core.config import settings
        level = settings.LOG_LEVEL
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s"},
            },
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "default"},
            },
            "root": {"handlers": ["console"], "level": level},
            # uvicorn ships its own handlers; keep them but align the level
            "loggers": {
                "uvicorn": {"level": level},
                "sqlalchemy.engine": {"level": logging.WARNING},
            },
        }
    )
    _configured = True
