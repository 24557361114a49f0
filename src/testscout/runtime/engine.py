# src/testscout/runtime/engine.py

"""
High-level coordinator for one unit-test run.

Resolves configuration, discovers files, dispatches the runner and merges
results. The host supplies project root, changed paths, config lookup and
the coverage flag explicitly.
"""

import asyncio
import os
from collections.abc import Iterable
from pathlib import Path
from typing import TypeAlias

import attrs
import structlog
from attrs import define, field

from testscout.config.suite import load_suite_config
from testscout.discovery import match_affected, resolve
from testscout.reports import JsonReportParser, ReportParser, TestResult, TestStatus
from testscout.runtime.aggregator import aggregate
from testscout.runtime.context import ConfigLookup, prepare_context
from testscout.runtime.dispatcher import Dispatcher
from testscout.telemetry import StructLogger
from testscout.testing import TestRunner

log: StructLogger = structlog.get_logger("runtime.engine")

NO_TESTS_MESSAGE = "No tests to run."


@define(frozen=True, slots=True)
class TestRunReport:
    """Results of a run, grouped by test file in discovery order."""
    __test__ = False

    results: tuple[TestResult, ...] = field(factory=tuple, converter=tuple)
    test_files: tuple[str, ...] = field(factory=tuple, converter=tuple)
    affected_files: tuple[str, ...] = field(factory=tuple, converter=tuple)

    @property
    def passed(self) -> bool:
        return not any(result.status.is_failure for result in self.results)

    def count(self, status: TestStatus) -> int:
        return sum(1 for result in self.results if result.status is status)


@define(frozen=True, slots=True)
class NoTestsToRun:
    """Discovery found nothing to execute. Not a failure."""
    reason: str = NO_TESTS_MESSAGE


EngineResult: TypeAlias = TestRunReport | NoTestsToRun


class UnitTestEngine:
    """Runs the affected unit tests of a project and returns their results."""

    def __init__(
        self,
        project_root: str | os.PathLike,
        changed_paths: Iterable[str],
        config: ConfigLookup,
        coverage_enabled: bool = False,
        parser: ReportParser | None = None,
        runner: TestRunner | None = None,
    ):
        self.project_root = project_root
        self.changed_paths = tuple(changed_paths)
        self.config = config
        self.coverage_enabled = coverage_enabled
        self.parser = parser or JsonReportParser()
        self.dispatcher = Dispatcher(runner)

    async def run(self) -> EngineResult:
        """
        Execute the run.

        Raises:
            ConfigurationError: before any process is started, when the runner
                config or binary cannot be resolved or the suite description
                cannot be parsed.
        """
        context = prepare_context(
            self.project_root,
            self.changed_paths,
            self.config,
            coverage_enabled=self.coverage_enabled,
        )
        run_log = log.bind(project_root=context.project_root)

        suite_config = load_suite_config(Path(context.config_file))
        resolution = resolve(suite_config, context.project_root)
        context = attrs.evolve(
            context,
            affected_files=match_affected(
                resolution.whitelist_files, context.changed_paths, context.project_root
            ),
        )

        if not resolution.test_files:
            run_log.info(NO_TESTS_MESSAGE, emoji_key="discover")
            return NoTestsToRun()

        test_files = list(resolution.test_files)
        units = self.dispatcher.prepare_units(test_files, context)
        try:
            outcomes = await self.dispatcher.dispatch(units, context)
            results = aggregate(outcomes.values(), context, self.parser)
        finally:
            for unit in units:
                unit.cleanup()

        report = TestRunReport(
            results=results,
            test_files=test_files,
            affected_files=context.affected_files,
        )
        run_log.info(
            "Unit test run complete",
            test_files=len(test_files),
            results=len(report.results),
            failed=report.count(TestStatus.FAIL),
            broken=report.count(TestStatus.BROKEN),
            emoji_key="success" if report.passed else "fail",
        )
        return report

    def run_sync(self) -> EngineResult:
        """Blocking wrapper for hosts without an event loop."""
        return asyncio.run(self.run())


# 🔼⚙️
