"""Config module exports."""

from mongoplane.config.loader import MongoplaneSettings, load_config
from mongoplane.config.models import (
    DatabaseConfig,
    LoggingConfig,
    MigrationsConfig,
    MongoplaneConfig,
)

__all__ = [
    "load_config",
    "MongoplaneConfig",
    "MongoplaneSettings",
    "DatabaseConfig",
    "LoggingConfig",
    "MigrationsConfig",
]
