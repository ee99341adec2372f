"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from mongoplane.config.models import (
    DatabaseConfig,
    LogOutputConfig,
    MigrationsConfig,
    MongoplaneConfig,
)


class TestDefaults:
    def test_root_config_defaults(self) -> None:
        config = MongoplaneConfig()

        assert config.logging.level == "INFO"
        assert config.database.uri == "mongodb://localhost:27017"
        assert config.database.name == "mongoplane"
        assert config.migrations.w == "majority"
        assert config.migrations.journal is True
        assert config.migrations.wtimeout_ms is None


class TestLogOutputConfig:
    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_console_destinations_accepted(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/out.log")


class TestDatabaseConfig:
    @pytest.mark.parametrize("name", ["", "a.b", "has space", "x/y", "$db"])
    def test_invalid_database_names_rejected(self, name: str) -> None:
        with pytest.raises(ValidationError):
            DatabaseConfig(name=name)

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DatabaseConfig(server_selection_timeout_ms=0)


class TestMigrationsConfig:
    def test_numeric_string_w_becomes_int(self) -> None:
        assert MigrationsConfig(w="2").w == 2

    def test_tag_w_kept_as_string(self) -> None:
        assert MigrationsConfig(w="majority").w == "majority"

    def test_unacknowledged_w_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MigrationsConfig(w=0)
