"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from mongoplane.config.models import LoggingConfig, LogOutputConfig
from mongoplane.core.logging import (
    bind_run_id,
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
)


def _json_lines(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line]


class TestRunId:
    """Sync run id context variable."""

    def setup_method(self) -> None:
        clear_run_id()

    def test_given_explicit_id_when_bound_then_returned_and_visible(self) -> None:
        result = bind_run_id("boot-7")

        assert result == "boot-7"
        assert get_run_id() == "boot-7"

    def test_given_no_id_when_bound_then_generates_short_hex(self) -> None:
        run_id = bind_run_id()

        assert len(run_id) == 12
        int(run_id, 16)

    def test_given_bound_id_when_cleared_then_none(self) -> None:
        bind_run_id("to-clear")

        clear_run_id()

        assert get_run_id() is None


class TestConfigureLogging:
    """Handler and renderer wiring."""

    def setup_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_run_id()

    def teardown_method(self) -> None:
        for handler in list(logging.getLogger().handlers):
            logging.getLogger().removeHandler(handler)
            handler.close()

    def test_given_json_format_when_log_then_stderr_line_is_json(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given JSON output on stderr, when an event is logged, then it parses."""
        # Given
        configure_logging(json_format=True, level="INFO")

        # When
        get_logger("mongoplane.test").info("index.sync.start", collection="users")

        # Then
        lines = [line for line in capsys.readouterr().err.splitlines() if line]
        data = json.loads(lines[-1])
        assert data["event"] == "index.sync.start"
        assert data["collection"] == "users"
        assert data["level"] == "info"
        assert data["logger"] == "mongoplane.test"
        assert "timestamp" in data

    def test_given_bound_run_id_when_log_then_run_id_in_event(self, tmp_path: Path) -> None:
        """Given a bound run id, when logging, then every event carries it."""
        # Given
        log_file = tmp_path / "sync.log"
        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))])
        )
        bind_run_id("boot-1")

        # When
        get_logger().info("migration.applied", matched=1)
        clear_run_id()
        get_logger().info("model.sync.done")

        # Then
        first, second = _json_lines(log_file)
        assert first["run_id"] == "boot-1"
        assert "run_id" not in second

    def test_given_outputs_with_levels_when_log_then_each_filters(self, tmp_path: Path) -> None:
        """Given a DEBUG root and an INFO output, then DEBUG reaches only the other."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "nested" / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("index.catalog.read")
        logger.info("index.sync.done")

        # Then
        assert [e["event"] for e in _json_lines(info_file)] == ["index.sync.done"]
        assert [e["event"] for e in _json_lines(debug_file)] == [
            "index.catalog.read",
            "index.sync.done",
        ]

    def test_given_reconfigure_when_called_twice_then_handlers_replaced(self) -> None:
        configure_logging(level="INFO")
        configure_logging(level="INFO")

        assert len(logging.getLogger().handlers) == 1

    def test_given_debug_level_then_driver_logger_stays_at_warning(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("pymongo").level == logging.WARNING

    def test_given_console_format_when_log_then_event_rendered(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(level="INFO")

        get_logger().warning("migration.noop", migration="backfill")

        err = capsys.readouterr().err
        assert "migration.noop" in err
        assert "backfill" in err
