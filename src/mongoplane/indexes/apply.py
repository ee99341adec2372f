"""Apply a reconciliation plan to a collection.

Drops run first, one request per name, so a replaced index never collides
with its successor. All creations then go out as one batched request.
Nothing here is atomic: a failure after the drops leaves those indexes
missing until the next reconciliation.
"""

from __future__ import annotations

import structlog
from pymongo.database import Database
from pymongo.errors import PyMongoError

from mongoplane.core.errors import ReconcileError
from mongoplane.indexes.models import ReconciliationPlan

log = structlog.get_logger(__name__)


def apply_plan(db: Database, collection_name: str, plan: ReconciliationPlan) -> None:
    """Issue the drop and create requests described by ``plan``.

    Raises:
        ReconcileError: INDEX_OPERATION_FAILED on the first rejected request.
    """
    if plan.is_empty:
        return

    collection = db[collection_name]

    for name in sorted(plan.to_drop):
        try:
            collection.drop_index(name)
        except PyMongoError as e:
            raise ReconcileError.index_operation_failed(
                collection_name, "drop", [name], str(e)
            ) from e
        log.info("index.dropped", collection=collection_name, index=name)

    if not plan.to_create:
        return

    names = sorted(plan.to_create)
    models = [plan.to_create[name].to_index_model() for name in names]
    try:
        collection.create_indexes(models)
    except PyMongoError as e:
        raise ReconcileError.index_operation_failed(
            collection_name, "create", names, str(e)
        ) from e
    log.info("index.created", collection=collection_name, indexes=names)
