#
# src/testscout/runtime/__init__.py
#
"""
Run orchestration: context preparation, dispatch, aggregation and the engine.
"""
from .aggregator import aggregate
from .context import ConfigLookup, RunContext, prepare_context
from .dispatcher import Dispatcher, RunOutcome, TestUnit
from .engine import EngineResult, NoTestsToRun, TestRunReport, UnitTestEngine

__all__ = [
    "ConfigLookup",
    "Dispatcher",
    "EngineResult",
    "NoTestsToRun",
    "RunContext",
    "RunOutcome",
    "TestRunReport",
    "TestUnit",
    "UnitTestEngine",
    "aggregate",
    "prepare_context",
]

# 🔼⚙️
