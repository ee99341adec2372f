"""Time-windowed schema migrations."""

from mongoplane.migration.executor import (
    DEFAULT_WRITE_CONCERN,
    MigrationExecutor,
    apply_migration,
    migrate,
    write_concern_for,
)
from mongoplane.migration.models import (
    IntervalMigration,
    Migration,
    MigrationResult,
    MigrationState,
)

__all__ = [
    "DEFAULT_WRITE_CONCERN",
    "IntervalMigration",
    "Migration",
    "MigrationExecutor",
    "MigrationResult",
    "MigrationState",
    "apply_migration",
    "migrate",
    "write_concern_for",
]
