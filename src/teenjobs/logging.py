"""Logging utilities for the marketplace services."""

from __future__ import annotations

import logging
from typing import Literal

import structlog

Renderer = Literal["json", "console"]


def configure_logging(level: str = "INFO", *, renderer: Renderer = "json") -> None:
    """Configure structlog over stdlib logging.

    Values bound with ``structlog.contextvars.bound_contextvars`` (the CLI binds
    the command name) are merged into every event.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    final = structlog.dev.ConsoleRenderer(colors=False) if renderer == "console" else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            final,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )
