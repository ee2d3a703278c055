"""Public observability primitives: structured logging."""

from cheevo_lint.observability.logging import (
    LoggingConfig,
    LoggingHandle,
    get_active_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "LoggingConfig",
    "LoggingHandle",
    "get_active_logger",
    "setup_logging",
    "shutdown_logging",
]
