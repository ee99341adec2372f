"""Migration declarations and results.

Declarations are immutable values built by the model ahead of time. They
have no identity in the database: nothing records that a migration ran.
An interval migration stays active until its threshold passes and relies
on its filter excluding already-migrated documents to be idempotent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TypeAlias


class MigrationState(str, Enum):
    """Outcome of evaluating one migration at one point in time."""

    NOOP = "noop"  # threshold passed, permanently inert
    APPLIED = "applied"  # update issued and acknowledged


@dataclass(frozen=True, slots=True)
class IntervalMigration:
    """A filter + ``$set``/``$unset`` update that runs until ``threshold``.

    Every instance runs it at boot until the threshold passes, which also
    catches documents written by instances that were not upgraded yet.
    Pick thresholds generously: documents still stale afterwards stay so.
    A naive ``threshold`` is taken to be UTC.
    """

    name: str
    threshold: datetime
    filter: dict[str, Any] = field(default_factory=dict)
    set: dict[str, Any] | None = None
    unset: dict[str, Any] | None = None

    @property
    def threshold_utc(self) -> datetime:
        if self.threshold.tzinfo is None:
            return self.threshold.replace(tzinfo=UTC)
        return self.threshold

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is past the threshold. A naive ``now`` is taken to be UTC."""
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return now > self.threshold_utc

    def update_document(self) -> dict[str, Any] | None:
        """The update operators to issue, or None if neither is declared."""
        if self.set is None and self.unset is None:
            return None
        update: dict[str, Any] = {}
        if self.set is not None:
            update["$set"] = self.set
        if self.unset is not None:
            update["$unset"] = self.unset
        return update


# Closed set of migration kinds, matched exhaustively by the executor
Migration: TypeAlias = IntervalMigration


@dataclass(frozen=True, slots=True)
class MigrationResult:
    """What happened to one migration during one run."""

    name: str
    state: MigrationState
    matched: int = 0
    modified: int = 0
