#
# src/testscout/testing/subprocess_runner.py
#
"""
A generic, source-agnostic test runner using asyncio.subprocess.
"""
import asyncio
from pathlib import Path

import structlog

from testscout.exceptions import TestScoutError
from testscout.testing.protocols import TestRunner, TestRunResult

log = structlog.get_logger("testing.runner")


class SubprocessTestRunner(TestRunner):
    """
    Implements the TestRunner protocol by executing a command in a subprocess.
    """
    async def launch(
        self,
        command: list[str],
        working_dir: Path,
    ) -> asyncio.subprocess.Process:
        """
        Starts the given command using asyncio.create_subprocess_exec.
        """
        runner_log = log.bind(
            command=" ".join(command),
            working_dir=str(working_dir),
        )
        runner_log.debug("Launching runner process", emoji_key="dispatch")

        try:
            return await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=working_dir,
            )
        except FileNotFoundError as e:
            runner_log.error("Runner command not found", command_executable=command[0])
            raise TestScoutError(
                f"Runner command not found: '{command[0]}'. Is it installed and in the system's PATH?"
            ) from e
        except OSError as e:
            runner_log.error("Runner process could not be started", error=str(e))
            raise TestScoutError(f"Could not start runner process: {e}") from e

    async def collect(self, process: asyncio.subprocess.Process) -> TestRunResult:
        """
        Waits for the process to exit and decodes its output.
        """
        stdout_bytes, stderr_bytes = await process.communicate()

        exit_code = process.returncode if process.returncode is not None else -1
        success = exit_code == 0

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")

        log.debug(
            "Runner process finished",
            pid=process.pid,
            exit_code=exit_code,
            stdout_len=len(stdout),
            stderr_len=len(stderr),
        )

        return TestRunResult(
            success=success,
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
        )

# 🔼⚙️
