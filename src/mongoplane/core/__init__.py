"""Core module exports."""

from mongoplane.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    MigrationError,
    MongoplaneError,
    ReconcileError,
)
from mongoplane.core.logging import (
    bind_run_id,
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "MigrationError",
    "MongoplaneError",
    "ReconcileError",
    # Logging
    "bind_run_id",
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
]
