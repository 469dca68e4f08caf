"""Observability module for logging."""

from toprank.observability.logging import (
    bind_ranking_context,
    clear_ranking_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    "bind_ranking_context",
    "clear_ranking_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
