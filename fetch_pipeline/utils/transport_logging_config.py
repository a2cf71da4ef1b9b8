"""Transport logging configuration utilities.

This module provides logging configuration for the HTTP transport libraries
the default base executor is built on, so that httpx and httpcore records
share the trace-aware format used by the pipeline middleware.
"""

from __future__ import annotations

import logging.config
import os

from fetch_pipeline.utils.constants import (
    DEFAULT_LOG_DATE_FORMAT,
    DEFAULT_LOG_FORMAT,
    LOG_ROTATION_CONFIG,
    LOGGER,
)
from fetch_pipeline.utils.pylogger import (
    get_log_file_path,
)

TRANSPORT_LOGGERS = ("httpx", "httpcore", "fetch_pipeline")


def get_transport_log_config():
    """Returns a dictConfig-compatible logging configuration for the transport stack.

    httpx logs one INFO line per request, httpcore logs connection events at
    DEBUG. Both are routed to console and file alongside the package's own
    loggers.
    """
    log_level = os.environ.get("PYTHON_LOG_LEVEL", "INFO").upper()
    log_file_path = get_log_file_path()

    loggers = {
        name: {
            "handlers": ["console", "file"],
            "level": log_level,
            "propagate": False,
        }
        for name in TRANSPORT_LOGGERS
    }

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            LOGGER: {
                "()": "fetch_pipeline.utils.pylogger.TraceFormatter",
                "format": DEFAULT_LOG_FORMAT,
                "datefmt": DEFAULT_LOG_DATE_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "formatter": LOGGER,
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "formatter": LOGGER,
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_file_path,
                **LOG_ROTATION_CONFIG,
            },
        },
        "loggers": loggers,
        "root": {
            "level": log_level,
            "handlers": ["console", "file"],
        },
    }

    return config


def apply_transport_log_config():
    """Apply the transport logging configuration to the running process."""
    logging.config.dictConfig(get_transport_log_config())

