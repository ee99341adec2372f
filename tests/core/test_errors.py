"""Tests for error types and codes."""

import pytest

from mongoplane.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    MigrationError,
    MongoplaneError,
    ReconcileError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.CATALOG_UNAVAILABLE, 3000),
            (ErrorCode.MALFORMED_CATALOG_ENTRY, 3000),
            (ErrorCode.INDEX_OPERATION_FAILED, 3000),
            (ErrorCode.MIGRATION_DECLARATION_INVALID, 4000),
            (ErrorCode.MIGRATION_WRITE_FAILED, 4000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestMongoplaneError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = MongoplaneError(
            code=ErrorCode.CATALOG_UNAVAILABLE,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 3001,
            "error": "CATALOG_UNAVAILABLE",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = MongoplaneError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        assert str(error) == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions and can be chained."""
        cause = RuntimeError("driver")

        with pytest.raises(MongoplaneError) as exc_info:
            raise ReconcileError.catalog_unavailable("users", "boom") from cause

        assert exc_info.value.__cause__ is cause


class TestConfigError:
    """ConfigError factory method tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/etc/cfg.yaml", "bad yaml")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert error.details == {"path": "/etc/cfg.yaml", "reason": "bad yaml"}

    def test_invalid_value_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("database.name", 42, "bad")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["value"] == "42"
        assert "database.name" in error.message


class TestReconcileError:
    """ReconcileError factory method tests."""

    def test_catalog_unavailable_is_retryable(self) -> None:
        error = ReconcileError.catalog_unavailable("users", "not primary")

        assert error.code == ErrorCode.CATALOG_UNAVAILABLE
        assert error.retryable is True
        assert error.details["collection"] == "users"

    def test_malformed_catalog_entry_names_missing_field(self) -> None:
        error = ReconcileError.malformed_catalog_entry("users", {"name": "x"}, "key")

        assert error.code == ErrorCode.MALFORMED_CATALOG_ENTRY
        assert error.details["missing"] == "key"
        assert "'key'" in error.message

    def test_index_operation_failed_names_indexes(self) -> None:
        error = ReconcileError.index_operation_failed(
            "users", "create", ["email_1", "age_-1"], "duplicate key"
        )

        assert error.code == ErrorCode.INDEX_OPERATION_FAILED
        assert error.details["names"] == ["email_1", "age_-1"]
        assert "email_1, age_-1" in error.message


class TestMigrationError:
    """MigrationError factory method tests."""

    def test_declaration_invalid(self) -> None:
        error = MigrationError.declaration_invalid("users", "backfill")

        assert error.code == ErrorCode.MIGRATION_DECLARATION_INVALID
        assert error.retryable is False
        assert "'$set' or '$unset'" in error.message

    def test_write_failed_carries_migration_name(self) -> None:
        error = MigrationError.write_failed("users", "backfill", "timeout")

        assert error.code == ErrorCode.MIGRATION_WRITE_FAILED
        assert error.details["migration"] == "backfill"


class TestInternalError:
    def test_unexpected_keeps_details(self) -> None:
        error = InternalError.unexpected("odd", kind="Foo")

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {"kind": "Foo"}
