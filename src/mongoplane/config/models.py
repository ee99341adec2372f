"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (MONGOPLANE__SECTION__KEY)
3. Project YAML (.mongoplane/config.yaml)
4. Global YAML (~/.config/mongoplane/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    MONGOPLANE__<SECTION>__<KEY>=<VALUE>

Examples:
    MONGOPLANE__LOGGING__LEVEL=DEBUG
    MONGOPLANE__DATABASE__URI=mongodb://db-0:27017/?replicaSet=rs0
    MONGOPLANE__MIGRATIONS__W=majority
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        MONGOPLANE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DatabaseConfig(BaseModel):
    """Database connection configuration.

    Env vars:
        MONGOPLANE__DATABASE__URI: Connection string
        MONGOPLANE__DATABASE__NAME: Database holding the model collections
        MONGOPLANE__DATABASE__SERVER_SELECTION_TIMEOUT_MS: Server selection timeout
    """

    uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string.",
    )
    name: str = Field(
        default="mongoplane",
        description="Database holding the model collections.",
    )
    server_selection_timeout_ms: int = Field(
        default=30000,
        description="How long a boot-time sync waits for a usable server before failing.",
    )
    connect_timeout_ms: int = Field(
        default=20000,
        description="Socket connect timeout.",
    )
    app_name: str | None = Field(
        default="mongoplane",
        description="Client application name reported to the server.",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or any(ch in v for ch in '/\\. "$'):
            raise ValueError(f"Invalid database name: {v!r}")
        return v

    @field_validator("server_selection_timeout_ms", "connect_timeout_ms")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class MigrationsConfig(BaseModel):
    """Write acknowledgment requested by interval migrations.

    Env vars:
        MONGOPLANE__MIGRATIONS__W: Write concern 'w' (e.g. majority, 1)
        MONGOPLANE__MIGRATIONS__JOURNAL: Require on-disk journal confirmation
        MONGOPLANE__MIGRATIONS__WTIMEOUT_MS: Write concern timeout
    """

    w: int | str = Field(
        default="majority",
        description="Write concern 'w'. Matched/modified counts are only "
        "trustworthy with an acknowledged write (w >= 1 or 'majority').",
    )
    journal: bool = Field(
        default=True,
        description="Require journal confirmation for migration writes.",
    )
    wtimeout_ms: int | None = Field(
        default=None,
        description="Write concern timeout. None waits indefinitely.",
    )

    @field_validator("w")
    @classmethod
    def validate_w(cls, v: int | str) -> int | str:
        if isinstance(v, str) and v.isdigit():
            v = int(v)
        if isinstance(v, int) and v < 1:
            raise ValueError(f"Migrations require an acknowledged write concern, got w={v}")
        return v


class MongoplaneConfig(BaseModel):
    """Root configuration for Mongoplane.

    All settings can be configured via:
    1. Environment variables: MONGOPLANE__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    migrations: MigrationsConfig = Field(default_factory=MigrationsConfig)
