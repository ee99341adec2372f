"""Index reconciliation: declared indexes vs. the server catalog."""

from mongoplane.indexes.apply import apply_plan
from mongoplane.indexes.catalog import read_catalog
from mongoplane.indexes.diff import diff_indexes
from mongoplane.indexes.models import (
    IndexCatalogEntry,
    IndexSpec,
    ReconciliationPlan,
    basic_index_options,
)
from mongoplane.indexes.naming import canonical_name
from mongoplane.indexes.reconcile import IndexReconciler, sync_indexes

__all__ = [
    "IndexCatalogEntry",
    "IndexReconciler",
    "IndexSpec",
    "ReconciliationPlan",
    "apply_plan",
    "basic_index_options",
    "canonical_name",
    "diff_indexes",
    "read_catalog",
    "sync_indexes",
]
