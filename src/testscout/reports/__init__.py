#
# src/testscout/reports/__init__.py
#
"""
Structured-report parsing sub-package for testscout.
"""
from .clover import read_coverage
from .json_report import JsonReportParser, decode_event_stream
from .protocols import ReportParser, TestResult, TestStatus

__all__ = [
    "JsonReportParser",
    "ReportParser",
    "TestResult",
    "TestStatus",
    "decode_event_stream",
    "read_coverage",
]

# 🔼⚙️
