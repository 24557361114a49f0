# src/testscout/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from testscout.cli.utils import (
    build_layered_config,
    config_path_option,
    load_project_config,
    logging_options,
    setup_logging_from_context,
)
from testscout.config import load_suite_config
from testscout.exceptions import ConfigurationError
from testscout.runtime.context import (
    RUNNER_BINARY_KEY,
    RUNNER_CONFIG_KEY,
    lookup_config_value,
    normalize_root,
    resolve_config_file,
)
from testscout.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")


@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@click.option(
    "-p",
    "--project-root",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Root directory of the project under test.",
)
@config_path_option
@logging_options
@click.pass_context
def show_config(ctx: click.Context, project_root: Path, config_path: Path | None, **kwargs):
    """Load, validate, and display the configuration."""
    try:
        project_config = load_project_config(project_root, config_path)
        setup_logging_from_context(
            ctx,
            local_log_level=kwargs.get("log_level"),
            local_log_file=kwargs.get("log_file"),
            local_json_logs=kwargs.get("json_logs"),
            config_log_level=project_config.global_config.log_level,
        )
        log.info("Executing 'config show' command", project_root=str(project_root))

        click.echo(pretty_repr(project_config.global_config, expand_all=True))
        layered = build_layered_config(project_config)
        values = layered.as_dict()
        for key in (RUNNER_CONFIG_KEY, RUNNER_BINARY_KEY):
            values.setdefault(key, lookup_config_value(layered, key))
        click.echo(pretty_repr(values, expand_all=True))

        root = normalize_root(project_root)
        suite_path = resolve_config_file(root, lookup_config_value(layered, RUNNER_CONFIG_KEY))
        suite_config = load_suite_config(Path(suite_path))
        log.debug("Suite description loaded by 'show' command.", path=suite_path)
        click.echo(pretty_repr(suite_config, expand_all=True))

        if not suite_config.test_suites:
            log.warning("Suite description declares no test suites.", path=suite_path)

    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e), exc_info=True)
        click.echo(f"Error: Configuration problem:\n{e}", err=True)
        ctx.exit(1)
    except Exception as e:
        log.critical(
            "An unexpected error occurred during 'config show'",
            error=str(e),
            exc_info=True,
        )
        click.echo(f"Error: An unexpected issue occurred: {e}", err=True)
        ctx.exit(2)

# 🖥️⚙️
