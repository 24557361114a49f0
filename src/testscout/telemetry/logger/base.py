# src/testscout/telemetry/logger/base.py

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger

from testscout.telemetry.logger.processors import (
    add_emoji_processor,
    remove_extra_keys_processor,
)

BASE_LOGGER_NAME = "testscout"
# The log file keeps a full trace of every run regardless of console verbosity.
DEFAULT_FILE_LEVEL = logging.DEBUG


def resolve_level(level: int | str) -> int:
    """Numeric level for a level number or a case-insensitive level name."""
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")
    return numeric


def setup_logging(
    level: int | str = logging.INFO,
    json_logs: bool = False,
    log_file: str | None = None,
    file_only: bool = False,
    file_level: int | str = DEFAULT_FILE_LEVEL,
) -> None:
    """
    Configures structlog for the entire application.

    Console logs go to stderr at `level`; stdout is reserved for results.
    An optional JSON log file records at `file_level`.
    """
    console_level = resolve_level(level)
    file_level = resolve_level(file_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_emoji_processor,
        remove_extra_keys_processor,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=shared_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if json_logs:
        console_renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        console_renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

    # Root passes everything any handler wants; handlers do the filtering.
    handler_levels = [] if file_only else [console_level]
    if log_file:
        handler_levels.append(file_level)
    root_logger.setLevel(min(handler_levels, default=console_level))

    slog = structlog.get_logger(BASE_LOGGER_NAME)

    if not file_only:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=console_renderer))
        console_handler.setLevel(console_level)
        root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            slog.error("Failed to open log file", log_file=log_file, error=str(e))
        else:
            file_handler.setFormatter(
                structlog.stdlib.ProcessorFormatter(
                    processor=structlog.processors.JSONRenderer(sort_keys=True)
                )
            )
            file_handler.setLevel(file_level)
            root_logger.addHandler(file_handler)

    slog.debug(
        "structlog logging initialization complete",
        console_level=logging.getLevelName(console_level),
        file_level=logging.getLevelName(file_level) if log_file else None,
        json_console_format=json_logs,
        console_output_enabled=not file_only,
        log_file=log_file or "None",
    )


StructLogger = FilteringBoundLogger

# 🔼⚙️
