"""Data models for index reconciliation.

All models are plain dataclasses with no driver state attached; the only
driver type that appears is the ``IndexModel`` built on demand for the
creation request.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pymongo import IndexModel

from mongoplane.config.constants import TEXT_INDEX_KEY_FIELDS
from mongoplane.indexes.naming import canonical_name

# Either an ordered mapping or the driver's list-of-pairs form
KeySpec = Mapping[str, Any] | Iterable[tuple[str, Any]]


@dataclass(frozen=True, slots=True)
class IndexSpec:
    """A declared index: ordered key pattern plus opaque creation options.

    ``keys`` keeps declaration order; it accepts a mapping or a list of
    ``(field, direction)`` pairs as the driver does.
    """

    keys: dict[str, Any]
    options: dict[str, Any] = field(default_factory=dict)

    def __init__(self, keys: KeySpec, options: Mapping[str, Any] | None = None) -> None:
        key_dict = dict(keys.items() if isinstance(keys, Mapping) else keys)
        if not key_dict:
            raise ValueError("An index must declare at least one key")
        object.__setattr__(self, "keys", key_dict)
        object.__setattr__(self, "options", dict(options or {}))

    @property
    def canonical_name(self) -> str:
        return canonical_name(self.keys)

    @property
    def name(self) -> str:
        """Explicit ``name`` option if declared, canonical name otherwise."""
        explicit = self.options.get("name")
        return str(explicit) if explicit else self.canonical_name

    def with_name(self) -> IndexSpec:
        """Copy whose options always carry the effective name."""
        if self.options.get("name"):
            return self
        return IndexSpec(self.keys, {**self.options, "name": self.canonical_name})

    def to_index_model(self) -> IndexModel:
        return IndexModel(list(self.keys.items()), **self.with_name().options)


@dataclass(frozen=True, slots=True)
class IndexCatalogEntry:
    """An index as reported by the server's catalog."""

    name: str
    keys: dict[str, Any]
    options: dict[str, Any]
    canonical_name: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_text(self) -> bool:
        """Text indexes report internal ``_fts``/``_ftsx`` keys, not the declared ones."""
        return any(key in TEXT_INDEX_KEY_FIELDS for key in self.keys)


@dataclass
class ReconciliationPlan:
    """Indexes to drop and create to converge a collection on its declaration.

    A name in both ``to_drop`` and ``to_create`` is a replacement: the
    server cannot alter an index in place.
    """

    to_create: dict[str, IndexSpec] = field(default_factory=dict)
    to_drop: set[str] = field(default_factory=set)
    unchanged: set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not self.to_create and not self.to_drop

    @property
    def replaced(self) -> set[str]:
        """Names dropped and recreated under the same name."""
        return self.to_drop & self.to_create.keys()

    def summary(self) -> dict[str, Any]:
        """Compact form for structured logs."""
        return {
            "create": sorted(self.to_create),
            "drop": sorted(self.to_drop),
            "unchanged": len(self.unchanged),
        }


def basic_index_options(
    name: str,
    background: bool,
    unique: bool | None = None,
    expire_after_seconds: int | None = None,
    sparse: bool | None = None,
) -> dict[str, Any]:
    """Options for the common case: a named index, optionally unique/TTL/sparse.

    Unset values are left out so they do not take part in comparison
    against the catalog.
    """
    options: dict[str, Any] = {"name": name, "background": background}
    if unique is not None:
        options["unique"] = unique
    if expire_after_seconds is not None:
        options["expireAfterSeconds"] = expire_after_seconds
    if sparse is not None:
        options["sparse"] = sparse
    return options
