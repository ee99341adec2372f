"""Mongoplane - index reconciliation and interval migrations for MongoDB models."""

from mongoplane.core.errors import (
    ConfigError,
    MigrationError,
    MongoplaneError,
    ReconcileError,
)
from mongoplane.indexes import (
    IndexSpec,
    ReconciliationPlan,
    basic_index_options,
    canonical_name,
    sync_indexes,
)
from mongoplane.migration import (
    IntervalMigration,
    MigrationResult,
    MigrationState,
    migrate,
)
from mongoplane.model import Model, ModelDeclaration, ModelSyncReport, sync_model, sync_models

__version__ = "0.1.0"

sync = sync_indexes

__all__ = [
    "ConfigError",
    "IndexSpec",
    "IntervalMigration",
    "MigrationError",
    "MigrationResult",
    "MigrationState",
    "Model",
    "ModelDeclaration",
    "ModelSyncReport",
    "MongoplaneError",
    "ReconcileError",
    "ReconciliationPlan",
    "basic_index_options",
    "canonical_name",
    "migrate",
    "sync",
    "sync_indexes",
    "sync_model",
    "sync_models",
]
