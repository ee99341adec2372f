"""Pure index diff engine.

Compares the declared index set of a model against the catalog the
server reported and classifies every name. No driver access.

Classification per name:
- declared only: create
- current only: drop
- both, declared options and key pattern match: unchanged
- both, anything declared differs: drop then create under the same name

Comparison is one-directional: options the server reports but the model
never declared do not count as differences.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from mongoplane.indexes.models import IndexCatalogEntry, IndexSpec, ReconciliationPlan

log = structlog.get_logger(__name__)


def declared_by_name(specs: Iterable[IndexSpec]) -> dict[str, IndexSpec]:
    """Key declared specs by effective name, injecting canonical names.

    Raises:
        ValueError: if two declarations resolve to the same name.
    """
    named: dict[str, IndexSpec] = {}
    for spec in specs:
        spec = spec.with_name()
        if spec.name in named:
            raise ValueError(f"Index name '{spec.name}' is declared more than once")
        named[spec.name] = spec
    return named


def diff_indexes(
    declared: Mapping[str, IndexSpec] | Iterable[IndexSpec],
    current: Mapping[str, IndexCatalogEntry],
) -> ReconciliationPlan:
    """Compute the create/drop plan converging ``current`` on ``declared``.

    Args:
        declared: name -> IndexSpec, or the specs themselves
        current: name -> IndexCatalogEntry as returned by read_catalog()

    Returns:
        ReconciliationPlan; ``is_empty`` when nothing has to change.
    """
    specs = declared.values() if isinstance(declared, Mapping) else declared
    target = declared_by_name(specs)
    plan = ReconciliationPlan()

    for name in current:
        if name not in target:
            plan.to_drop.add(name)

    for name, spec in target.items():
        entry = current.get(name)
        if entry is None:
            plan.to_create[name] = spec
        elif index_matches(spec, entry):
            plan.unchanged.add(name)
        else:
            log.debug("index.diff.changed", index=name, declared=spec.options, current=entry.options)
            plan.to_drop.add(name)
            plan.to_create[name] = spec

    return plan


def index_matches(spec: IndexSpec, entry: IndexCatalogEntry) -> bool:
    """True if every declared property of ``spec`` holds for ``entry``."""
    if not entry.is_text and spec.canonical_name != entry.canonical_name:
        return False
    for option, value in spec.options.items():
        if option not in entry.options:
            return False
        if not values_equal(value, entry.options[option]):
            return False
    return True


def values_equal(left: Any, right: Any) -> bool:
    """Deep structural equality for option values.

    Sequences compare element-wise regardless of list/tuple type; mappings
    compare by content. Numbers compare by value across driver types.
    """
    return _normalize(left) == _normalize(right)


def _normalize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value
