# src/testscout/cli/utils.py

import logging
from pathlib import Path

import click
import structlog

from testscout.config import LayeredConfig, TestScoutConfig, load_config
from testscout.telemetry.logger import setup_logging as core_setup_logging

log = structlog.get_logger("cli.utils")

LOG_LEVEL_CHOICES = click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False)
DEFAULT_CONFIG_PATH = Path("testscout.conf")


def logging_options(f):
    """Decorator to add logging options to any command."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        envvar="TESTSCOUT_LOG_LEVEL",
        help="Set the logging level (overrides config file).",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar="TESTSCOUT_LOG_FILE",
        help="Path to write logs to a file (JSON format).",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar="TESTSCOUT_JSON_LOGS",
        help="Output console logs as JSON.",
    )(f)
    return f


def config_path_option(f):
    """Decorator for the project config file option shared by commands."""
    return click.option(
        "-c",
        "--config-path",
        type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
        default=None,
        envvar="TESTSCOUT_CONF",
        help=f"Path to the testscout configuration file [default: <project root>/{DEFAULT_CONFIG_PATH}] (env var TESTSCOUT_CONF).",
        show_envvar=True,
    )(f)


def setup_logging_from_context(
    ctx: click.Context,
    local_log_level: str | None = None,
    local_log_file: str | None = None,
    local_json_logs: bool | None = None,
    default_log_level: str = "INFO",
    config_log_level: str | None = None,
) -> None:
    """
    Setup logging using context values, allowing local overrides.

    Level precedence: command option > group option or env var > the
    project config file's [global] log_level > the command default.
    """
    log_level_str = (
        local_log_level or ctx.obj.get("LOG_LEVEL") or config_log_level or default_log_level
    )
    log_file_path = local_log_file or ctx.obj.get("LOG_FILE")
    use_json_logs = local_json_logs if local_json_logs is not None else ctx.obj.get("JSON_LOGS", False)

    numeric_level = logging.getLevelName(log_level_str.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        log_level_str = "INFO"

    core_setup_logging(
        level=numeric_level,
        json_logs=use_json_logs,
        log_file=log_file_path,
    )

    log.debug(
        "CLI logging initialized via utils",
        level=log_level_str,
        file=log_file_path or "console",
        json=use_json_logs,
    )


def load_project_config(project_root: Path, config_path: Path | None) -> TestScoutConfig:
    """Load the explicit config file, or testscout.conf in the project root."""
    path = config_path if config_path is not None else project_root / DEFAULT_CONFIG_PATH
    return load_config(path)


def build_layered_config(config: TestScoutConfig, overrides: dict | None = None) -> LayeredConfig:
    """Stack the project config under CLI overrides and env vars."""
    return LayeredConfig.from_sources(config=config, overrides=overrides)

# ⚙️🛠️
