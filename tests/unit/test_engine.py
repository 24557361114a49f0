# tests/unit/test_engine.py

"""End-to-end tests for UnitTestEngine against a fake runner."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from testscout.config import LayeredConfig
from testscout.exceptions import ConfigFileNotFoundError, ConfigParseError, RunnerNotFoundError
from testscout.reports import TestStatus
from testscout.runtime import NoTestsToRun, TestRunReport, UnitTestEngine


@pytest.mark.asyncio
class TestUnitTestEngine:
    async def test_end_to_end_scenario(self, project: Path, runner_config: LayeredConfig):
        root = str(project)
        engine = UnitTestEngine(project, ["src/A.ext"], runner_config)

        report = await engine.run()

        assert isinstance(report, TestRunReport)
        assert report.test_files == (f"{root}/tests/ATest.ext",)
        assert report.affected_files == (f"{root}/src/A.ext",)
        assert [(r.name, r.status) for r in report.results] == [("FakeATest::testOk", TestStatus.PASS)]
        assert report.passed

    async def test_unmatched_change_reports_over_whole_whitelist(
        self, project: Path, runner_config: LayeredConfig
    ):
        report = await UnitTestEngine(project, ["README.md"], runner_config).run()

        assert report.affected_files == (f"{project}/src/A.ext", f"{project}/src/B.ext")

    async def test_results_grouped_in_discovery_order(
        self, project: Path, runner_config: LayeredConfig, plan, events
    ):
        tests = project / "tests"
        plan(tests / "ATest.ext", sleep=0.5, events=events("ATest::testA"))
        plan(tests / "BTest.ext", sleep=0.0, events=events("BTest::testB"))
        plan(tests / "CTest.ext", sleep=0.25, events=events("CTest::testC"))

        report = await UnitTestEngine(project, [], runner_config).run()

        assert [r.name for r in report.results] == ["ATest::testA", "BTest::testB", "CTest::testC"]

    async def test_crashing_file_does_not_stop_siblings(
        self, project: Path, runner_config: LayeredConfig, plan, events
    ):
        tests = project / "tests"
        plan(tests / "ATest.ext", events=events("ATest::testA"))
        plan(tests / "BTest.ext", events=[], stderr="PHP Fatal error: boom", exit=255)
        plan(
            tests / "CTest.ext",
            events=[
                {"event": "testStart", "test": "CTest::testFails"},
                {"event": "test", "test": "CTest::testFails", "status": "fail", "message": "nope", "time": 0.1},
            ],
            exit=1,
        )

        report = await UnitTestEngine(project, [], runner_config).run()

        assert [(r.name, r.status) for r in report.results] == [
            ("ATest::testA", TestStatus.PASS),
            (f"{project}/tests/BTest.ext", TestStatus.BROKEN),
            ("CTest::testFails", TestStatus.FAIL),
        ]
        assert report.results[1].user_data == "PHP Fatal error: boom"
        assert not report.passed
        assert report.count(TestStatus.FAIL) == 1

    async def test_coverage_for_affected_files(self, project: Path, runner_config: LayeredConfig, plan, events):
        source = project / "src" / "A.ext"
        clover = (
            f'<coverage><project><file name="{source}">'
            '<line num="1" type="stmt" count="0"/><line num="2" type="stmt" count="1"/>'
            "</file></project></coverage>"
        )
        plan(project / "tests" / "ATest.ext", events=events("ATest::testA"), coverage=clover)

        report = await UnitTestEngine(project, ["src/A.ext"], runner_config, coverage_enabled=True).run()

        (result,) = report.results
        assert result.coverage == {"src/A.ext": "UC"}

    async def test_temporary_artifacts_are_removed(self, project: Path, runner_config: LayeredConfig):
        engine = UnitTestEngine(project, [], runner_config, coverage_enabled=True)
        created = []
        real_prepare = engine.dispatcher.prepare_units

        def spy(test_files, context):
            units = real_prepare(test_files, context)
            created.extend(units)
            return units

        with patch.object(engine.dispatcher, "prepare_units", side_effect=spy):
            await engine.run()

        assert created
        for unit in created:
            assert not Path(unit.report_path).exists()
            assert not Path(unit.coverage_path).exists()

    async def test_no_test_files_is_a_distinct_outcome(self, project: Path, runner_config: LayeredConfig):
        (project / "tests" / "ATest.ext").unlink()

        result = await UnitTestEngine(project, ["src/A.ext"], runner_config).run()

        assert isinstance(result, NoTestsToRun)
        assert result.reason == "No tests to run."

    async def test_empty_suites_section_is_no_tests(self, project: Path, runner_config: LayeredConfig):
        (project / "phpunit.xml").write_text(
            '<phpunit><filter><whitelist><directory suffix=".ext">./src</directory></whitelist></filter></phpunit>'
        )

        assert isinstance(await UnitTestEngine(project, [], runner_config).run(), NoTestsToRun)

    async def test_missing_runner_config_aborts_before_dispatch(self, project: Path, fake_runner: Path):
        config = LayeredConfig({"unit.runner.config": "missing.xml", "unit.runner.binary": str(fake_runner)})
        engine = UnitTestEngine(project, [], config)

        with patch.object(engine.dispatcher, "dispatch", new_callable=AsyncMock) as dispatch:
            with pytest.raises(ConfigFileNotFoundError):
                await engine.run()

        dispatch.assert_not_called()

    async def test_unresolvable_binary_aborts(self, project: Path):
        config = LayeredConfig({"unit.runner.binary": "vendor/bin/nothing-here"})

        with pytest.raises(RunnerNotFoundError):
            await UnitTestEngine(project, [], config).run()

    async def test_malformed_suite_description_aborts(self, project: Path, runner_config: LayeredConfig):
        (project / "phpunit.xml").write_text("<phpunit><testsuites>")

        with pytest.raises(ConfigParseError):
            await UnitTestEngine(project, [], runner_config).run()


def test_run_sync(project: Path, runner_config: LayeredConfig):
    report = UnitTestEngine(str(project), ["src/B.ext"], runner_config).run_sync()

    assert report.affected_files == (f"{project}/src/B.ext",)
    assert json.dumps([r.name for r in report.results]) == '["FakeATest::testOk"]'
