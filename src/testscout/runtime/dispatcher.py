# src/testscout/runtime/dispatcher.py

"""
Runs one runner process per discovered test file.

Every process is started before any is awaited. Outcomes come back in
discovery order no matter which process finishes first.
"""

import asyncio
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

import structlog
from attrs import define, field

from testscout.exceptions import TestScoutError
from testscout.runtime.context import RunContext
from testscout.telemetry import StructLogger
from testscout.testing import SubprocessTestRunner, TestRunner, TestRunResult

log: StructLogger = structlog.get_logger("runtime.dispatcher")

ERROR_ROUTING_ARGS = ("-d", "display_errors=stderr")
REPORT_FLAG = "--log-json"
COVERAGE_FLAG = "--coverage-clover"
CONFIG_FLAG = "-c"
LAUNCH_FAILED_EXIT_CODE = -1


def _make_temp_file(kind: str) -> str:
    handle, path = tempfile.mkstemp(prefix=f"testscout-{kind}-")
    os.close(handle)
    return path


@define(slots=True)
class TestUnit:
    """One test file and the temporary artifacts its runner writes."""
    __test__ = False

    test_path: str = field()
    report_path: str = field()
    coverage_path: str | None = field(default=None)

    @classmethod
    def create(cls, test_path: str, coverage_enabled: bool) -> "TestUnit":
        return cls(
            test_path=test_path,
            report_path=_make_temp_file("report"),
            coverage_path=_make_temp_file("coverage") if coverage_enabled else None,
        )

    def cleanup(self) -> None:
        for path in (self.report_path, self.coverage_path):
            if path:
                try:
                    os.unlink(path)
                except FileNotFoundError:
                    pass


@define(frozen=True, slots=True)
class RunOutcome:
    """What one runner process left behind."""
    test_path: str
    exit_code: int
    stderr: str
    report_path: str
    coverage_path: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def build_command(context: RunContext, unit: TestUnit) -> list[str]:
    """Runner argv: config, error routing, report flags, then the test file."""
    command = [context.runner_binary]
    if context.config_file:
        command += [CONFIG_FLAG, context.config_file]
    command += [*ERROR_ROUTING_ARGS, REPORT_FLAG, unit.report_path]
    if unit.coverage_path:
        command += [COVERAGE_FLAG, unit.coverage_path]
    command.append(unit.test_path)
    return command


class Dispatcher:
    """Launches all runner processes, then collects them in discovery order."""

    def __init__(self, runner: TestRunner | None = None):
        self._runner = runner or SubprocessTestRunner()

    def prepare_units(self, test_files: Iterable[str], context: RunContext) -> list[TestUnit]:
        return [TestUnit.create(path, context.coverage_enabled) for path in test_files]

    async def dispatch(
        self,
        units: list[TestUnit],
        context: RunContext,
    ) -> dict[str, RunOutcome]:
        """
        Run every unit and return {test file: RunOutcome} in discovery order.

        A process that cannot be started becomes a failed outcome for that
        file only; its siblings still run.
        """
        working_dir = Path(context.project_root)
        log.info("Dispatching runner processes", count=len(units), emoji_key="dispatch")

        # Phase 1: start everything.
        launched: list[asyncio.subprocess.Process | TestScoutError] = []
        for unit in units:
            try:
                launched.append(await self._runner.launch(build_command(context, unit), working_dir))
            except TestScoutError as e:
                launched.append(e)

        # Phase 2: drain every process concurrently, gather keeps launch order.
        results = await asyncio.gather(*(self._collect(item) for item in launched))

        outcomes: dict[str, RunOutcome] = {}
        for unit, result in zip(units, results):
            outcomes[unit.test_path] = RunOutcome(
                test_path=unit.test_path,
                exit_code=result.exit_code,
                stderr=result.stderr,
                report_path=unit.report_path,
                coverage_path=unit.coverage_path,
            )
            if not result.success:
                log.debug("Runner exited non-zero", test_path=unit.test_path, exit_code=result.exit_code)
        return outcomes

    async def _collect(self, launched: "asyncio.subprocess.Process | TestScoutError") -> TestRunResult:
        if isinstance(launched, TestScoutError):
            return TestRunResult(
                success=False,
                exit_code=LAUNCH_FAILED_EXIT_CODE,
                stdout="",
                stderr=str(launched),
            )
        return await self._runner.collect(launched)


# 🔼⚙️
