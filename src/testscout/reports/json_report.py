#
# src/testscout/reports/json_report.py
#
"""
Default ReportParser for the runner's streaming JSON log.

The log is a sequence of JSON objects written back to back, one per event
(suiteStart, testStart, test). A "test" event closes the matching
"testStart"; a test that starts but never finishes means the runner died.
"""
import json
import re
from collections.abc import Mapping
from typing import Any

import structlog

from testscout.exceptions import ReportParseError
from testscout.reports.clover import read_coverage
from testscout.reports.protocols import ReportParser, TestResult, TestStatus

log = structlog.get_logger("reports.json")

SKIP_MARKERS = ("Skipped Test", "Incomplete Test")
_DATA_SET_SUFFIX = re.compile(r" \(.*\)", re.DOTALL)


def decode_event_stream(report: str, test_path: str | None = None) -> list[dict[str, Any]]:
    """Split a back-to-back JSON object stream into a list of events."""
    decoder = json.JSONDecoder()
    events: list[dict[str, Any]] = []
    index = 0
    length = len(report)
    while True:
        while index < length and report[index] in " \t\r\n,":
            index += 1
        if index >= length:
            break
        try:
            event, index = decoder.raw_decode(report, index)
        except json.JSONDecodeError as e:
            raise ReportParseError(f"Undecodable JSON report: {e}", test_path=test_path) from e
        if isinstance(event, list):
            events.extend(item for item in event if isinstance(item, dict))
        elif isinstance(event, dict):
            events.append(event)
    return events


def _format_trace(event: Mapping[str, Any]) -> str:
    return "".join(
        f"\n{frame.get('file')}:{frame.get('line')}"
        for frame in event.get("trace") or []
        if isinstance(frame, Mapping)
    )


def _classify(event: Mapping[str, Any]) -> tuple[TestStatus, str]:
    status = event.get("status")
    message = str(event.get("message") or "")
    if status == "fail":
        return TestStatus.FAIL, message + "\n" + _format_trace(event)
    if status == "error":
        if any(marker in message for marker in SKIP_MARKERS):
            return TestStatus.SKIP, message
        return TestStatus.BROKEN, message + _format_trace(event)
    return TestStatus.PASS, ""


def _duration(event: Mapping[str, Any]) -> float | None:
    value = event.get("time")
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class JsonReportParser(ReportParser):
    """Implements the ReportParser protocol for the runner's JSON event log."""

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
        parse_log = log.bind(test_path=test_path)

        if not report.strip():
            parse_log.warning("Empty structured report, runner probably failed to start tests")
            return [TestResult(name=test_path, status=TestStatus.BROKEN, user_data=stderr)]

        try:
            events = decode_event_stream(report, test_path=test_path)
        except ReportParseError as e:
            parse_log.error("Structured report could not be parsed", error=str(e))
            return [
                TestResult(
                    name=test_path,
                    status=TestStatus.BROKEN,
                    user_data=f"{e}\n{stderr}".rstrip(),
                )
            ]

        # A bad coverage artifact costs the coverage, never the test results.
        coverage: dict[str, str] = {}
        if coverage_enabled and coverage_file:
            try:
                coverage = read_coverage(coverage_file, affected_files, project_root)
            except ReportParseError as e:
                parse_log.warning("Coverage report could not be parsed", error=str(e))

        results: list[TestResult] = []
        last_test_finished = True
        last_event: Mapping[str, Any] = {}
        for event in events:
            last_event = event
            kind = event.get("event")
            if kind == "testStart":
                last_test_finished = False
                continue
            if kind != "test":
                continue

            status, user_data = _classify(event)
            results.append(
                TestResult(
                    name=_DATA_SET_SUFFIX.sub("", str(event.get("test", ""))),
                    status=status,
                    duration=_duration(event),
                    user_data=user_data,
                    coverage=coverage,
                )
            )
            last_test_finished = True

        if not last_test_finished:
            parse_log.warning("Runner stopped in the middle of a test", test=last_event.get("test"))
            results.append(
                TestResult(
                    name=str(last_event.get("test") or test_path),
                    status=TestStatus.BROKEN,
                    user_data=stderr,
                )
            )

        parse_log.debug("Parsed structured report", results=len(results))
        return results

# 🔼⚙️
