"""Shared telemetry: logging setup."""

from guestmenu.shared.telemetry.logging import (
    RequestIDLogFilter,
    get_logger,
    setup_logging,
)

__all__ = [
    "RequestIDLogFilter",
    "get_logger",
    "setup_logging",
]
