"""Index catalog reader.

Lists the indexes the server currently holds for a collection and turns
each raw catalog document into an ``IndexCatalogEntry``. A collection
that does not exist yet has an empty catalog.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pymongo.database import Database
from pymongo.errors import OperationFailure, PyMongoError

from mongoplane.config.constants import (
    BOOKKEEPING_INDEX_FIELDS,
    NAMESPACE_NOT_FOUND,
    PRIMARY_KEY_INDEX_NAME,
)
from mongoplane.core.errors import ReconcileError
from mongoplane.indexes.models import IndexCatalogEntry
from mongoplane.indexes.naming import canonical_name

log = structlog.get_logger(__name__)


def read_catalog(db: Database, collection_name: str) -> dict[str, IndexCatalogEntry]:
    """Return the current indexes of ``collection_name`` keyed by name.

    The primary-key index is left out; it is never reconciled.

    Raises:
        ReconcileError: CATALOG_UNAVAILABLE if listing fails for any reason
            other than a missing namespace, MALFORMED_CATALOG_ENTRY if an
            entry has no usable ``key`` or ``name``.
    """
    try:
        raw_entries = list(db[collection_name].list_indexes())
    except OperationFailure as e:
        if e.code == NAMESPACE_NOT_FOUND:
            log.debug("index.catalog.namespace_missing", collection=collection_name)
            return {}
        raise ReconcileError.catalog_unavailable(collection_name, str(e)) from e
    except PyMongoError as e:
        raise ReconcileError.catalog_unavailable(collection_name, str(e)) from e

    catalog: dict[str, IndexCatalogEntry] = {}
    for raw in raw_entries:
        entry = parse_catalog_entry(collection_name, raw)
        if is_primary_key_index(entry):
            continue
        catalog[entry.name] = entry

    log.debug("index.catalog.read", collection=collection_name, indexes=sorted(catalog))
    return catalog


def parse_catalog_entry(collection_name: str, raw: Mapping[str, Any]) -> IndexCatalogEntry:
    """Parse one catalog document, separating comparable options from bookkeeping."""
    keys = raw.get("key")
    if not isinstance(keys, Mapping) or not keys:
        raise ReconcileError.malformed_catalog_entry(collection_name, dict(raw), "key")
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise ReconcileError.malformed_catalog_entry(collection_name, dict(raw), "name")

    options = {k: v for k, v in raw.items() if k not in BOOKKEEPING_INDEX_FIELDS}
    return IndexCatalogEntry(
        name=name,
        keys=dict(keys),
        options=options,
        canonical_name=canonical_name(keys),
        raw=dict(raw),
    )


def is_primary_key_index(entry: IndexCatalogEntry) -> bool:
    return entry.name == PRIMARY_KEY_INDEX_NAME or list(entry.keys.items()) == [("_id", 1)]
