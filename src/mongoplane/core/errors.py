"""Mongoplane error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index reconciliation
- 4xxx: Migration
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Index reconciliation (3xxx)
    CATALOG_UNAVAILABLE = 3001
    MALFORMED_CATALOG_ENTRY = 3002
    INDEX_OPERATION_FAILED = 3003

    # Migration (4xxx)
    MIGRATION_DECLARATION_INVALID = 4001
    MIGRATION_WRITE_FAILED = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class MongoplaneError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CATALOG_UNAVAILABLE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logs and reports."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(MongoplaneError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Cannot read config file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Config field '{field}' rejected: {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ReconcileError(MongoplaneError):
    """Index catalog read, diff and apply errors."""

    @classmethod
    def catalog_unavailable(cls, collection: str, reason: str) -> "ReconcileError":
        return cls(
            code=ErrorCode.CATALOG_UNAVAILABLE,
            message=f"Failed to list indexes of '{collection}': {reason}",
            retryable=True,
            details={"collection": collection, "reason": reason},
        )

    @classmethod
    def malformed_catalog_entry(
        cls, collection: str, entry: dict[str, Any], missing: str
    ) -> "ReconcileError":
        return cls(
            code=ErrorCode.MALFORMED_CATALOG_ENTRY,
            message=f"Index document of '{collection}' has no usable '{missing}' field",
            details={"collection": collection, "missing": missing, "entry": repr(entry)},
        )

    @classmethod
    def index_operation_failed(
        cls, collection: str, operation: str, names: list[str], reason: str
    ) -> "ReconcileError":
        joined = ", ".join(names)
        return cls(
            code=ErrorCode.INDEX_OPERATION_FAILED,
            message=f"Failed to {operation} index(es) {joined} on '{collection}': {reason}",
            retryable=True,
            details={
                "collection": collection,
                "operation": operation,
                "names": list(names),
                "reason": reason,
            },
        )


class MigrationError(MongoplaneError):
    """Migration declaration and execution errors."""

    @classmethod
    def declaration_invalid(cls, collection: str, migration: str) -> "MigrationError":
        return cls(
            code=ErrorCode.MIGRATION_DECLARATION_INVALID,
            message=(
                f"Migration '{migration}' on '{collection}': "
                "one of '$set' or '$unset' must be specified"
            ),
            details={"collection": collection, "migration": migration},
        )

    @classmethod
    def write_failed(cls, collection: str, migration: str, reason: str) -> "MigrationError":
        return cls(
            code=ErrorCode.MIGRATION_WRITE_FAILED,
            message=f"Migration '{migration}' on '{collection}' failed: {reason}",
            retryable=True,
            details={"collection": collection, "migration": migration, "reason": reason},
        )


class InternalError(MongoplaneError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
