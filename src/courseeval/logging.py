"""Structured logging for the evaluation pipeline and CLI.

The engine under ``courseeval.core`` never logs; observability is attached
around the call boundary by the pipeline.
"""

from __future__ import annotations

import logging

import structlog

LOGGER_NAME = "courseeval"


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog to emit JSON lines at ``level``."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.typing.FilteringBoundLogger:
    """Return a logger bound to a pipeline component name."""
    return structlog.get_logger(LOGGER_NAME).bind(component=component)
