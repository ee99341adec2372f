"""Boot-time synchronization of declared models.

A model supplies its collection name, its declared indexes and its
declared migrations. ``sync_model`` reconciles the indexes and then runs
the migrations, the sequence a service performs once per model before it
starts serving traffic. Any failure propagates; the caller decides
whether to retry the whole sequence.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import structlog
from pymongo.database import Database

from mongoplane.config.models import MongoplaneConfig
from mongoplane.core.logging import bind_run_id, clear_run_id
from mongoplane.indexes.models import IndexSpec, ReconciliationPlan
from mongoplane.indexes.reconcile import sync_indexes
from mongoplane.migration.executor import Clock, migrate, utc_now, write_concern_for
from mongoplane.migration.models import Migration, MigrationResult

log = structlog.get_logger(__name__)


@runtime_checkable
class Model(Protocol):
    """What the reconciler and executor need to know about a model."""

    @property
    def collection_name(self) -> str: ...

    def declared_indexes(self) -> Sequence[IndexSpec]: ...

    def declared_migrations(self) -> Sequence[Migration]: ...


@dataclass(frozen=True)
class ModelDeclaration:
    """A model described by value."""

    collection_name: str
    indexes: tuple[IndexSpec, ...] = ()
    migrations: tuple[Migration, ...] = ()

    def __post_init__(self) -> None:
        if not self.collection_name:
            raise ValueError("collection_name must not be empty")
        object.__setattr__(self, "indexes", tuple(self.indexes))
        object.__setattr__(self, "migrations", tuple(self.migrations))

    def declared_indexes(self) -> Sequence[IndexSpec]:
        return self.indexes

    def declared_migrations(self) -> Sequence[Migration]:
        return self.migrations


@dataclass
class ModelSyncReport:
    """Result of synchronizing one model."""

    collection: str
    plan: ReconciliationPlan
    migrations: list[MigrationResult] = field(default_factory=list)


def sync_model(
    db: Database,
    model: Model,
    *,
    config: MongoplaneConfig | None = None,
    now: Clock = utc_now,
) -> ModelSyncReport:
    """Reconcile indexes, then run migrations, for one model.

    Args:
        db: Database holding the model's collection
        model: The model declaration
        config: Supplies the migration write concern; defaults apply if None
        now: Clock used to evaluate migration thresholds

    Raises:
        ReconcileError: if index reconciliation fails (migrations do not run)
        MigrationError: for the first failing migration
    """
    write_concern = write_concern_for(config.migrations) if config is not None else None
    bind_run_id()
    try:
        log.info("model.sync.start", collection=model.collection_name)
        plan = sync_indexes(db, model.collection_name, model.declared_indexes())
        results = migrate(
            db,
            model.collection_name,
            model.declared_migrations(),
            now=now,
            write_concern=write_concern,
        )
        log.info("model.sync.done", collection=model.collection_name)
        return ModelSyncReport(collection=model.collection_name, plan=plan, migrations=results)
    finally:
        clear_run_id()


def sync_models(
    db: Database,
    models: Iterable[Model],
    *,
    config: MongoplaneConfig | None = None,
    now: Clock = utc_now,
) -> list[ModelSyncReport]:
    """Synchronize ``models`` in order, stopping at the first failure."""
    return [sync_model(db, model, config=config, now=now) for model in models]
