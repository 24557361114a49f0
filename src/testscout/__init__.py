#
# src/testscout/__init__.py
#
"""
testscout: discovers, dispatches and aggregates unit tests affected by a change.
"""
from testscout.discovery import locate
from testscout.reports import TestResult, TestStatus
from testscout.runtime import NoTestsToRun, TestRunReport, UnitTestEngine

__all__ = [
    "NoTestsToRun",
    "TestResult",
    "TestRunReport",
    "TestStatus",
    "UnitTestEngine",
    "locate",
]

# 🔼⚙️
