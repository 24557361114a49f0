#
# tests/conftest.py
#
import json
import logging
import sys
from pathlib import Path

import pytest
import structlog

from testscout.config import LayeredConfig

# Stand-in for the runner binary. It understands the runner's flags and
# takes its behaviour from the test file it is asked to run: a JSON object
# with optional "sleep", "events", "stderr", "exit" and "coverage" keys.
# Any other file content runs a single passing test.
FAKE_RUNNER_SOURCE = """#!@PYTHON@
import json
import logging
import os
import sys
import time


def main(argv):
    report = coverage = None
    positional = []
    args = iter(argv)
    for arg in args:
        if arg in ("-c", "-d"):
            next(args)
        elif arg == "--log-json":
            report = next(args)
        elif arg == "--coverage-clover":
            coverage = next(args)
        else:
            positional.append(arg)

    test_path = positional[-1]
    with open(test_path) as handle:
        text = handle.read()
    try:
        plan = json.loads(text)
    except ValueError:
        plan = {}
    if not isinstance(plan, dict):
        plan = {}

    time.sleep(plan.get("sleep", 0))

    events = plan.get("events")
    if events is None:
        suite = "Fake" + os.path.basename(test_path).split(".")[0]
        test = suite + "::testOk"
        events = [
            {"event": "suiteStart", "suite": suite, "tests": 1},
            {"event": "testStart", "suite": suite, "test": test},
            {"event": "test", "suite": suite, "test": test, "status": "pass",
             "time": 0.01, "message": "", "output": ""},
        ]
    if report:
        with open(report, "w") as handle:
            handle.write("".join(json.dumps(event) for event in events))
    if coverage and "coverage" in plan:
        with open(coverage, "w") as handle:
            handle.write(plan["coverage"])

    sys.stderr.write(plan.get("stderr", ""))
    return plan.get("exit", 0)


sys.exit(main(sys.argv[1:]))
"""

SUITE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<phpunit bootstrap="vendor/autoload.php">
  <filter>
    <whitelist>
      <directory suffix=".ext">./src</directory>
    </whitelist>
  </filter>
  <testsuites>
    <testsuite name="unit">
      <directory suffix="Test.ext">./tests</directory>
    </testsuite>
  </testsuites>
</phpunit>
"""


def write_plan(path: Path, **plan) -> Path:
    """Write a fake-runner plan into a test file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(plan))
    return path


def passing_events(name: str, time: float = 0.01) -> list[dict]:
    return [
        {"event": "suiteStart", "suite": name.split("::")[0], "tests": 1},
        {"event": "testStart", "suite": name.split("::")[0], "test": name},
        {"event": "test", "suite": name.split("::")[0], "test": name, "status": "pass", "time": time, "message": ""},
    ]


@pytest.fixture
def fake_runner(tmp_path: Path) -> Path:
    """An executable fake runner script."""
    script = tmp_path / "bin" / "fake-runner"
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(FAKE_RUNNER_SOURCE.replace("@PYTHON@", sys.executable))
    script.chmod(0o755)
    return script


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    A project with a whitelist over src/*.ext and one test suite over
    tests/*Test.ext: src/A.ext, src/B.ext and tests/ATest.ext.
    """
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "tests").mkdir()
    (root / "phpunit.xml").write_text(SUITE_XML)
    (root / "src" / "A.ext").write_text("<?php\nclass A {}\n")
    (root / "src" / "B.ext").write_text("<?php\nclass B {}\n")
    (root / "tests" / "ATest.ext").write_text("<?php\nclass ATest {}\n")
    return root


@pytest.fixture
def runner_config(fake_runner: Path) -> LayeredConfig:
    """Config lookup pointing the engine at the fake runner."""
    return LayeredConfig({"unit.runner.binary": str(fake_runner)})


@pytest.fixture(autouse=True)
def _clean_testscout_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's TESTSCOUT_* variables out of the tests."""
    for name in ("TESTSCOUT_LOG_LEVEL", "TESTSCOUT_LOG_FILE", "TESTSCOUT_JSON_LOGS", "TESTSCOUT_CONF",
                 "TESTSCOUT_UNIT_RUNNER_BINARY", "TESTSCOUT_UNIT_RUNNER_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def plan():
    """Returns the fake-runner plan writer."""
    return write_plan


@pytest.fixture
def events():
    """Returns a builder for a passing test's event stream."""
    return passing_events


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo logging set up by CLI invocations so later tests log to a live stream."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(handler)
    structlog.reset_defaults()
