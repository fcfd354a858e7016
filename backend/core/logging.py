"""
Logging setup for the API process.

Modules log through ``logging.getLogger(__name__)``; this only wires
handlers and levels once at startup.
"""

import logging.config

from core.config import settings


def build_logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def setup_logging(level: str | None = None):
    logging.config.dictConfig(build_logging_config((level or settings.LOG_LEVEL).upper()))
