"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are wire-protocol conventions of the MongoDB family of servers.

For configurable values, see models.py.
"""

# =============================================================================
# Index Catalog
# =============================================================================

PRIMARY_KEY_INDEX_NAME = "_id_"
"""Name the server gives the implicit primary-key index. Never dropped."""

BOOKKEEPING_INDEX_FIELDS = frozenset(
    {
        "v",
        "ns",
        "key",
        "textIndexVersion",
        "2dsphereIndexVersion",
    }
)
"""Catalog fields maintained by the server, excluded from option comparison."""

TEXT_INDEX_KEY_FIELDS = frozenset({"_fts", "_ftsx"})
"""Internal key fields the server reports in place of a text index's declared keys."""

# =============================================================================
# Server Error Codes
# =============================================================================

NAMESPACE_NOT_FOUND = 26
"""Returned by listIndexes when the collection does not exist yet."""
