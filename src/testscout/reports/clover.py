#
# src/testscout/reports/clover.py
#
"""
Reads clover XML coverage into per-line coverage strings.
"""
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from pathlib import Path

import structlog

from testscout.exceptions import ReportParseError

log = structlog.get_logger("reports.clover")

NOT_EXECUTABLE = "N"
COVERED = "C"
UNCOVERED = "U"


def _int_attr(element: ET.Element, name: str) -> int:
    try:
        return int(element.get(name, "0"))
    except ValueError as e:
        raise ReportParseError(f"Non-numeric '{name}' attribute in clover coverage") from e


def _line_count(path: str) -> int:
    try:
        with open(path, "rb") as handle:
            return sum(1 for _ in handle)
    except OSError:
        return 0


def read_coverage(
    coverage_file: str,
    affected_files: Mapping[str, str],
    project_root: str,
) -> dict[str, str]:
    """
    Build {relative path: coverage string} for affected files in a clover report.

    Files without a single covered statement are left out; clover lists every
    loaded file, even ones the test never touched.
    """
    try:
        text = Path(coverage_file).read_text(encoding="utf-8")
    except OSError as e:
        log.warning("Coverage file unreadable", path=coverage_file, error=str(e))
        return {}
    if not text.strip():
        return {}

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ReportParseError(f"Malformed clover coverage: {e}") from e

    prefix = project_root.rstrip("/") + "/"
    reports: dict[str, str] = {}
    for file_el in root.iter("file"):
        class_path = file_el.get("name", "")
        if not affected_files.get(class_path):
            continue

        coverage = [NOT_EXECUTABLE] * _line_count(class_path)
        any_line_covered = False
        for line_el in file_el.iter("line"):
            if line_el.get("type") != "stmt":
                continue
            line_no = _int_attr(line_el, "num")
            if not 0 < line_no <= len(coverage):
                continue
            if _int_attr(line_el, "count") > 0:
                coverage[line_no - 1] = COVERED
                any_line_covered = True
            else:
                coverage[line_no - 1] = UNCOVERED

        if any_line_covered:
            relative = class_path[len(prefix):] if class_path.startswith(prefix) else class_path
            reports[relative] = "".join(coverage)

    log.debug("Coverage read", path=coverage_file, files=len(reports))
    return reports

# 🔼⚙️
