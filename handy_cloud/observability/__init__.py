"""Observability module for logging."""

from handy_cloud.observability.logging import (
    configure_logging,
    get_logger,
    parse_log_level,
)


__all__ = [
    "configure_logging",
    "get_logger",
    "parse_log_level",
]
