# src/testscout/cli/run_cmds.py

import asyncio
import json
from pathlib import Path

import attrs
import click
import structlog

from testscout.cli.utils import (
    build_layered_config,
    config_path_option,
    load_project_config,
    logging_options,
    setup_logging_from_context,
)
from testscout.exceptions import ConfigurationError
from testscout.reports import TestResult, TestStatus
from testscout.runtime import NoTestsToRun, TestRunReport, UnitTestEngine
from testscout.runtime.context import RUNNER_BINARY_KEY, RUNNER_CONFIG_KEY
from testscout.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.run")

STATUS_LABELS = {
    TestStatus.PASS: "PASS",
    TestStatus.FAIL: "FAIL",
    TestStatus.SKIP: "SKIP",
    TestStatus.BROKEN: "BROKEN",
}


def _result_to_dict(result: TestResult) -> dict:
    data = attrs.asdict(result, recurse=False)
    data["status"] = result.status.value
    data["coverage"] = dict(result.coverage)
    return data


def _echo_report(report: TestRunReport) -> None:
    for result in report.results:
        line = f"{STATUS_LABELS[result.status]:<7} {result.name}"
        if result.duration is not None:
            line += f" ({result.duration:.3f}s)"
        click.echo(line)
        if result.status is not TestStatus.PASS and result.user_data:
            for detail in result.user_data.rstrip().splitlines():
                click.echo(f"        {detail}")

    summary = ", ".join(
        f"{report.count(status)} {status.value}" for status in TestStatus if report.count(status)
    )
    click.echo(f"{len(report.test_files)} test file(s): {summary or 'no results'}")


@click.command(name="run")
@click.argument("changed_paths", nargs=-1, type=str)
@click.option(
    "-p",
    "--project-root",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Root directory of the project under test.",
)
@config_path_option
@click.option(
    "--runner-config",
    type=str,
    default=None,
    help=f"Runner configuration file, relative to the project root (overrides '{RUNNER_CONFIG_KEY}').",
)
@click.option(
    "--runner-binary",
    type=str,
    default=None,
    help=f"Runner executable (overrides '{RUNNER_BINARY_KEY}').",
)
@click.option(
    "--coverage/--no-coverage",
    default=False,
    show_default=True,
    help="Ask the runner for line coverage of the affected files.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print results as a JSON document.",
)
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    changed_paths: tuple[str, ...],
    project_root: Path,
    config_path: Path | None,
    runner_config: str | None,
    runner_binary: str | None,
    coverage: bool,
    json_output: bool,
    **kwargs,
):
    """Run the unit tests of the project, reporting coverage for CHANGED_PATHS."""
    try:
        project_config = load_project_config(project_root, config_path)
        setup_logging_from_context(
            ctx,
            local_log_level=kwargs.get("log_level"),
            local_log_file=kwargs.get("log_file"),
            local_json_logs=kwargs.get("json_logs"),
            default_log_level="WARNING",
            config_log_level=project_config.global_config.log_level,
        )
        log.info(
            "Executing 'run' command",
            project_root=str(project_root),
            changed_paths=len(changed_paths),
            coverage=coverage,
        )

        layered = build_layered_config(
            project_config,
            overrides={RUNNER_CONFIG_KEY: runner_config, RUNNER_BINARY_KEY: runner_binary},
        )
        engine = UnitTestEngine(
            project_root,
            changed_paths,
            layered,
            coverage_enabled=coverage,
        )
        result = asyncio.run(engine.run())
    except ConfigurationError as e:
        log.error("Run aborted by configuration problem", error=str(e))
        click.echo(f"Error: Configuration problem:\n{e}", err=True)
        ctx.exit(1)
    except Exception as e:
        log.critical("An unexpected error occurred during 'run'", error=str(e), exc_info=True)
        click.echo(f"Error: An unexpected issue occurred: {e}", err=True)
        ctx.exit(2)

    if isinstance(result, NoTestsToRun):
        if json_output:
            click.echo(json.dumps({"status": "no-tests", "reason": result.reason}))
        else:
            click.echo(result.reason)
        return

    if json_output:
        payload = {
            "passed": result.passed,
            "test_files": list(result.test_files),
            "affected_files": list(result.affected_files),
            "results": [_result_to_dict(r) for r in result.results],
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        _echo_report(result)

    if not result.passed:
        ctx.exit(1)

# 🖥️⚙️
