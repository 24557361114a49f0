# src/testscout/runtime/aggregator.py

"""
Parses each runner outcome and concatenates the results in discovery order.
"""

from collections.abc import Iterable
from pathlib import Path

import structlog

from testscout.reports import ReportParser, TestResult
from testscout.runtime.context import RunContext
from testscout.runtime.dispatcher import RunOutcome

log = structlog.get_logger("runtime.aggregator")


def read_report(path: str) -> str:
    """Contents of a report artifact; missing or unreadable reads as empty."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.warning("Structured report unreadable", path=path, error=str(e))
        return ""


def aggregate(
    outcomes: Iterable[RunOutcome],
    context: RunContext,
    parser: ReportParser,
) -> list[TestResult]:
    """Hand every outcome to the parser; keep file order and in-file order."""
    results: list[TestResult] = []
    for outcome in outcomes:
        file_results = parser.parse_test_results(
            outcome.test_path,
            read_report(outcome.report_path),
            project_root=context.project_root,
            coverage_file=outcome.coverage_path,
            affected_files=context.affected_files,
            stderr=outcome.stderr,
            coverage_enabled=context.coverage_enabled,
        )
        log.debug(
            "Aggregated results for test file",
            test_path=outcome.test_path,
            exit_code=outcome.exit_code,
            results=len(file_results),
            emoji_key="report",
        )
        results.extend(file_results)
    return results


# 🔼⚙️
