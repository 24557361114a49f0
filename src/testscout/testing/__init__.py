#
# src/testscout/testing/__init__.py
#
"""
Runner process execution sub-package for testscout.
"""
from .protocols import TestRunner, TestRunResult
from .subprocess_runner import SubprocessTestRunner

__all__ = [
    "SubprocessTestRunner",
    "TestRunResult",
    "TestRunner",
]

# 🔼⚙️
