"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog

from toprank.settings.app import RankingSettings, get_settings


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the application.

    Sets up structlog with JSON output format and standard processors
    for timestamps, log levels, and context binding.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )


def configure_from_settings(settings: RankingSettings | None = None) -> None:
    """Configure logging from environment-driven settings.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
    """
    settings = settings or get_settings()
    level = logging.getLevelNamesMapping()[settings.log_level]
    configure_logging(level=level, json_format=settings.log_json)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_ranking_context(ranking_name: str) -> None:
    """Bind a ranking name to all subsequent log messages.

    Args:
        ranking_name: Label for the ranking being worked on.
    """
    structlog.contextvars.bind_contextvars(ranking_name=ranking_name)


def clear_ranking_context() -> None:
    """Clear ranking context from log messages."""
    structlog.contextvars.unbind_contextvars("ranking_name")
