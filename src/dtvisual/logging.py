"""Structured logging for dtvisual.

The decoder, projector and loader each hold a module-level logger and emit
events such as ``xunit_decoded``, ``xunit_decode_failed``,
``assembly_projected`` and ``test_run_loaded``. Loggers resolve the
structlog configuration on every call, so ``configure_logging`` takes effect
even after those modules have been imported.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from dtvisual.config import Settings


def configure_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    stream: TextIO | None = None,
) -> None:
    """
    Route dtvisual's decode and projection events through structlog.

    Args:
        log_level: Lowest level emitted. DEBUG adds one event per decoded
            document and per projected assembly.
        json_format: One JSON object per event if True; otherwise
            human-readable console lines.
        stream: Where events are written (defaults to sys.stderr, keeping
            stdout free for whatever the caller renders).
    """
    if stream is None:
        stream = sys.stderr

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,  # Disable caching for tests
    )


def configure_from_settings(settings: Settings, stream: TextIO | None = None) -> None:
    """Apply ``DTVISUAL_LOG_LEVEL`` and ``DTVISUAL_LOG_JSON_FORMAT``."""
    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json_format,
        stream=stream,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a lazy logger for a dtvisual module.

    Args:
        name: Module name, attached to every event as ``logger_name``.

    Returns:
        structlog logger proxy bound to the current configuration at call time.
    """
    # "logger" collides with wrap_logger's first positional parameter.
    return structlog.get_logger(name, logger_name=name)
