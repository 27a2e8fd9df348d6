"""Structured logging for Drive Health.

Components log through ``get_logger(__name__)``, which tags every event with
the emitting module. Nothing is configured on import; applications call
``configure_logging()`` (or ``configure_from_settings()``) once at startup.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Literal, Optional, TextIO

import structlog

if TYPE_CHECKING:
    from drive_health.config.settings import DriveHealthSettings


def build_processors(log_format: Literal["json", "text"]) -> List[structlog.typing.Processor]:
    """Processor chain for the given output format."""
    processors: List[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def configure_logging(
    log_format: Literal["json", "text"] = "json",
    log_level: str = "INFO",
    stream: Optional[TextIO] = None,
) -> None:
    """Configure structlog output for Drive Health events.

    Loggers are not cached, so module-level loggers pick up a later
    reconfiguration.

    Args:
        log_format: "json" for machine-readable lines, "text" for humans.
        log_level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR).
        stream: Where to write events. Defaults to stdout.
    """
    structlog.configure(
        processors=build_processors(log_format),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def configure_from_settings(
    settings: "DriveHealthSettings", stream: Optional[TextIO] = None
) -> None:
    """Configure logging from a loaded DriveHealthSettings."""
    configure_logging(
        log_format=settings.log_format, log_level=settings.log_level, stream=stream
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Get a logger whose events carry ``logger=<name>``."""
    return structlog.get_logger(name, logger=name)
