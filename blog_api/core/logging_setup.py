"""Logging for the API process: one stdout handler on the root logger.

Module loggers (``logging.getLogger(__name__)``) propagate to it; uvicorn
keeps its own handlers.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Install the handler once; later calls (reloads, tests) only change the level."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    dictConfig(logging_config(level))
