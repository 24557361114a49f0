#
# src/testscout/reports/protocols.py
#
"""
Defines the result model and the protocol for structured-report parsers.
"""
from collections.abc import Mapping
from enum import Enum
from typing import Protocol, runtime_checkable

from attrs import define, field


class TestStatus(Enum):
    """Outcome of one test as reported by the runner."""
    __test__ = False

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    BROKEN = "broken"  # Harness-level failure: crash, fatal error, unreadable report.

    @property
    def is_failure(self) -> bool:
        return self in (TestStatus.FAIL, TestStatus.BROKEN)


@define(frozen=True, slots=True)
class TestResult:
    """
    One parsed test outcome.

    `coverage` maps a project-relative source path to a per-line string:
    "N" not executable, "C" covered, "U" uncovered.
    """
    __test__ = False

    name: str
    status: TestStatus
    duration: float | None = None
    user_data: str = ""
    coverage: Mapping[str, str] = field(factory=dict)


@runtime_checkable
class ReportParser(Protocol):
    """
    Protocol for turning one runner process's outputs into test results.
    """
    def parse_test_results(
        self,
        test_path: str,
        report: str,
        *,
        project_root: str,
        coverage_file: str | None,
        affected_files: Mapping[str, str],
        stderr: str,
        coverage_enabled: bool,
    ) -> list[TestResult]:
        """
        Parses the structured report written by a single runner invocation.

        Args:
            test_path: The test file the runner executed.
            report: Raw contents of the structured report artifact.
            project_root: Absolute project root.
            coverage_file: Path of the coverage artifact, if coverage was enabled.
            affected_files: Files whose coverage should be reported.
            stderr: Captured standard error, used to explain harness failures.
            coverage_enabled: Whether coverage was requested for this run.

        Returns:
            Results in the order the runner reported them.
        """
        ...

# 🔼⚙️
