"""Canonical index names.

The name of an index is derived from its key pattern the same way the
server derives the name of an index created without one: every
``field_token`` pair joined by underscores, in key order. Key order is
part of the identity of a compound index, so ``{a: 1, b: 1}`` and
``{b: 1, a: 1}`` are different indexes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def render_token(token: Any) -> str:
    """Render a key direction or index type the way the server names it.

    Directions are integers (``1``/``-1``); drivers and older shells may
    report them as floats, which render as their integer value. Special
    index kinds (``text``, ``2dsphere``, ``hashed``) render as the tag.
    """
    if isinstance(token, bool):
        return str(int(token))
    if isinstance(token, float) and token.is_integer():
        return str(int(token))
    return str(token)


def canonical_name(keys: Mapping[str, Any]) -> str:
    """Build the canonical name for an ordered key pattern.

    >>> canonical_name({"email": 1})
    'email_1'
    >>> canonical_name({"last": 1, "first": -1})
    'last_1_first_-1'
    >>> canonical_name({"location": "2dsphere"})
    'location_2dsphere'
    """
    if not keys:
        raise ValueError("Cannot name an index with no keys")
    return "_".join(f"{field}_{render_token(token)}" for field, token in keys.items())
