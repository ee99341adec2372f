"""Database handle construction from configuration.

The reconciler and the migration executor never open connections
themselves; callers pass a ``Database`` in. This is the one place a
handle is built from ``DatabaseConfig``.
"""

from __future__ import annotations

import structlog
from pymongo import MongoClient
from pymongo.database import Database

from mongoplane.config.models import DatabaseConfig

log = structlog.get_logger(__name__)


def open_database(config: DatabaseConfig) -> Database:
    """Create a client for ``config.uri`` and return the configured database.

    The client connects lazily; the first command issued against the
    returned handle performs server selection.
    """
    client: MongoClient = MongoClient(
        config.uri,
        serverSelectionTimeoutMS=config.server_selection_timeout_ms,
        connectTimeoutMS=config.connect_timeout_ms,
        appname=config.app_name,
    )
    log.debug("db.client_created", database=config.name)
    return client[config.name]
