"""Migration executor.

Runs a model's migrations in declaration order against its collection.
Each run re-evaluates every threshold from scratch. The first failure
stops the run; migrations already applied in that run stay applied.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

import structlog
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.write_concern import WriteConcern

from mongoplane.config.models import MigrationsConfig
from mongoplane.core.errors import InternalError, MigrationError
from mongoplane.migration.models import (
    IntervalMigration,
    Migration,
    MigrationResult,
    MigrationState,
)

log = structlog.get_logger(__name__)

Clock = Callable[[], datetime]

DEFAULT_WRITE_CONCERN = WriteConcern(w="majority", j=True)


def utc_now() -> datetime:
    return datetime.now(UTC)


def write_concern_for(config: MigrationsConfig) -> WriteConcern:
    """Build the migration write concern from configuration."""
    return WriteConcern(w=config.w, j=config.journal, wtimeout=config.wtimeout_ms)


def apply_migration(
    collection: Collection,
    migration: Migration,
    *,
    now: Clock = utc_now,
    write_concern: WriteConcern | None = None,
) -> MigrationResult:
    """Evaluate and, if still due, apply a single migration."""
    match migration:
        case IntervalMigration():
            return _apply_interval(collection, migration, now(), write_concern)
        case _:
            raise InternalError.unexpected(
                "unknown migration kind", kind=type(migration).__name__
            )


def _apply_interval(
    collection: Collection,
    migration: IntervalMigration,
    now: datetime,
    write_concern: WriteConcern | None,
) -> MigrationResult:
    namespace = collection.name
    log.info("migration.start", collection=namespace, migration=migration.name)

    if migration.is_expired(now):
        log.info("migration.noop", collection=namespace, migration=migration.name)
        return MigrationResult(name=migration.name, state=MigrationState.NOOP)

    update = migration.update_document()
    if update is None:
        raise MigrationError.declaration_invalid(namespace, migration.name)

    if write_concern is None:
        write_concern = DEFAULT_WRITE_CONCERN
    target = collection.with_options(write_concern=write_concern)
    try:
        result = target.update_many(migration.filter, update, upsert=False)
    except PyMongoError as e:
        log.error("migration.failed", collection=namespace, migration=migration.name, error=str(e))
        raise MigrationError.write_failed(namespace, migration.name, str(e)) from e

    if not result.acknowledged:
        raise MigrationError.write_failed(
            namespace, migration.name, "write was not acknowledged; counts unavailable"
        )

    log.info(
        "migration.applied",
        collection=namespace,
        migration=migration.name,
        matched=result.matched_count,
        modified=result.modified_count,
    )
    return MigrationResult(
        name=migration.name,
        state=MigrationState.APPLIED,
        matched=result.matched_count,
        modified=result.modified_count,
    )


class MigrationExecutor:
    """Runs the declared migrations of one collection."""

    def __init__(
        self,
        db: Database,
        collection_name: str,
        *,
        now: Clock = utc_now,
        write_concern: WriteConcern | None = None,
    ) -> None:
        self.db = db
        self.collection_name = collection_name
        self.now = now
        self.write_concern = write_concern

    def run(self, migrations: Iterable[Migration]) -> list[MigrationResult]:
        """Apply ``migrations`` in order, stopping at the first failure.

        Raises:
            MigrationError: DECLARATION_INVALID or WRITE_FAILED for the
                first migration that fails.
        """
        collection = self.db[self.collection_name]
        results: list[MigrationResult] = []

        log.info("migration.run.start", collection=self.collection_name)
        for migration in migrations:
            results.append(
                apply_migration(
                    collection, migration, now=self.now, write_concern=self.write_concern
                )
            )

        log.info(
            "migration.run.done",
            collection=self.collection_name,
            applied=sum(1 for r in results if r.state is MigrationState.APPLIED),
            noop=sum(1 for r in results if r.state is MigrationState.NOOP),
        )
        return results


def migrate(
    db: Database,
    collection_name: str,
    migrations: Iterable[Migration],
    *,
    now: Clock = utc_now,
    write_concern: WriteConcern | None = None,
) -> list[MigrationResult]:
    """Run the migrations declared for ``collection_name``."""
    executor = MigrationExecutor(db, collection_name, now=now, write_concern=write_concern)
    return executor.run(migrations)
