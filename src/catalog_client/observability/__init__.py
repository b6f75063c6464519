"""Observability components: logging."""

from catalog_client.observability.logging import (
    get_logger,
    logger,
    setup_logging,
    setup_logging_from_settings,
)


__all__ = [
    "get_logger",
    "logger",
    "setup_logging",
    "setup_logging_from_settings",
]
