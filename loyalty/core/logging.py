# loyalty/core/logging.py

import os
import sys
from logging.config import dictConfig

from loyalty.core.config import APP_ENV

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if APP_ENV == "development" else "INFO").upper()

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | %(method)s %(path)s | "
    "%(status_code)s | %(process_time_ms)sms"
)


def _stdout_handler(formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": sys.stdout,
        "formatter": formatter,
    }


def setup_logging():
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": DEFAULT_FORMAT},
                "access": {"format": ACCESS_FORMAT},
            },
            "handlers": {
                "console": _stdout_handler("default"),
                "access_console": _stdout_handler("access"),
            },
            "loggers": {
                # request_logging_middleware only
                "access": {
                    "handlers": ["access_console"],
                    "level": "INFO",
                    "propagate": False,
                },
                # Job run lines are noisy at DEBUG
                "apscheduler": {"level": "WARNING"},
                "sqlalchemy.engine": {"level": "WARNING"},
                "uvicorn.access": {"level": "WARNING"},
            },
            "root": {
                "level": LOG_LEVEL,
                "handlers": ["console"],
            },
        }
    )
