"""Index reconciliation for one collection.

``sync_indexes`` is the entry point a model's boot sequence calls: read
the catalog, diff it against the declaration, apply the difference.
Running it again right after a successful run produces an empty plan.

There are no retries and no locks. Two instances syncing the same
collection at once may race; both converge on the same declaration, so
the next run of either settles any leftover difference.
"""

from __future__ import annotations

import time
from collections.abc import Iterable

import structlog
from pymongo.database import Database

from mongoplane.indexes.apply import apply_plan
from mongoplane.indexes.catalog import read_catalog
from mongoplane.indexes.diff import diff_indexes
from mongoplane.indexes.models import IndexSpec, ReconciliationPlan

log = structlog.get_logger(__name__)


class IndexReconciler:
    """Reconciles the indexes of one collection against a declaration."""

    def __init__(self, db: Database, collection_name: str) -> None:
        self.db = db
        self.collection_name = collection_name

    def plan(self, declared: Iterable[IndexSpec]) -> ReconciliationPlan:
        """Compute the plan without touching the collection."""
        current = read_catalog(self.db, self.collection_name)
        return diff_indexes(list(declared), current)

    def sync(self, declared: Iterable[IndexSpec]) -> ReconciliationPlan:
        """Converge the collection on ``declared`` and return the applied plan.

        Raises:
            ReconcileError: on catalog, entry or index request failures.
            ValueError: if two declarations share a name.
        """
        start_time = time.perf_counter()
        log.info("index.sync.start", collection=self.collection_name)

        plan = self.plan(declared)
        if plan.is_empty:
            log.info("index.sync.in_sync", collection=self.collection_name)
        else:
            log.info("index.sync.plan", collection=self.collection_name, **plan.summary())
            apply_plan(self.db, self.collection_name, plan)

        log.info(
            "index.sync.done",
            collection=self.collection_name,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )
        return plan


def sync_indexes(
    db: Database, collection_name: str, declared: Iterable[IndexSpec]
) -> ReconciliationPlan:
    """Synchronize the indexes of ``collection_name`` with ``declared``."""
    return IndexReconciler(db, collection_name).sync(declared)
