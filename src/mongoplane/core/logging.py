"""Structured logging for sync runs.

Every event goes through structlog and out via stdlib handlers, one per
configured output, each with its own level and renderer. A sync run id
is bound for the duration of one model's boot-time sync so that its
index and migration events can be grouped.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from mongoplane.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("sync_run_id", default=None)

# Loggers of the driver, kept at WARNING regardless of the configured level
DRIVER_LOGGERS = ("pymongo",)


def get_run_id() -> str | None:
    return _run_id.get()


def bind_run_id(run_id: str | None = None) -> str:
    """Bind ``run_id`` (or a fresh one) to the current context and return it."""
    value = run_id or uuid4().hex[:12]
    _run_id.set(value)
    return value


def clear_run_id() -> None:
    _run_id.set(None)


def _add_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    run_id = get_run_id()
    if run_id is not None:
        event_dict.setdefault("run_id", run_id)
    return event_dict


def _level_number(name: str | None, fallback: int) -> int:
    if name is None:
        return fallback
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else fallback


_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
    _add_run_id,  # type: ignore[list-item]
]


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog events to the outputs in ``config``.

    Without a config a single stderr output is set up from ``json_format``
    and ``level``. Calling it again replaces the previous setup.
    """
    from mongoplane.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_number(config.level, logging.INFO)

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(root_level)

    for output in config.outputs:
        handler = _handler_for(output.destination)
        handler.setLevel(_level_number(output.level, root_level))
        handler.setFormatter(_formatter_for(output))
        root.addHandler(handler)

    for name in DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _handler_for(destination: str) -> logging.Handler:
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _formatter_for(output: LogOutputConfig) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        stream = sys.stdout if output.destination == "stdout" else sys.stderr
        colors = output.destination in ("stderr", "stdout") and stream.isatty()
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
