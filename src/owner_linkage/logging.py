"""Structlog setup for Owner Linkage.

Library modules take ``structlog.get_logger(__name__)`` and never print; the
CLI calls :func:`configure_logging` once. Log lines go to stderr so command
output on stdout stays machine-readable.
"""
from __future__ import annotations

import logging
import sys
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: LogLevel = "INFO", *, json_output: bool = True) -> None:
    numeric = getattr(logging, level)
    logging.basicConfig(format="%(message)s", level=numeric)
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        # sys.stderr is looked up per logger, not at configure time
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
        cache_logger_on_first_use=False,
    )
