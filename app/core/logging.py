import logging
import logging.config
from typing import Any, Dict

from app.core.config import settings


LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stdout"
        },
    },
    "loggers": {
        "": {
            "handlers": ["console"],
            "level": settings.LOG_LEVEL,
        },
        "uvicorn.access": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False
        },
        "sqlalchemy.engine": {
            "level": "WARNING",
        },
    }
}


def setup_logging() -> None:
    """Configure root and library loggers once at application startup."""
    logging.config.dictConfig(LOGGING_CONFIG)
    logging.getLogger("multipart").setLevel(logging.WARNING)
