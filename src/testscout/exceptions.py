# src/testscout/exceptions.py

"""
Exception hierarchy for testscout.

Configuration-time errors abort a run before any runner process is launched.
Per-process failures never surface here; they become results of that file.
"""


class TestScoutError(Exception):
    """Base class for all testscout errors."""

    __test__ = False


class ConfigurationError(TestScoutError):
    """Raised when the project configuration or suite description is unusable."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: Exception | None = None,
    ):
        self.path = path
        self.details = details
        full_message = message
        if path:
            full_message += f" (Path: '{path}')"
        super().__init__(full_message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class ConfigParseError(ConfigurationError):
    """The suite description or project config could not be read or parsed."""

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """The configured runner config file does not exist."""

    pass


class RunnerNotFoundError(ConfigurationError):
    """The configured runner binary could not be found or resolved."""

    pass


class ReportParseError(TestScoutError):
    """A structured report produced by one runner process could not be decoded."""

    def __init__(self, message: str, test_path: str | None = None):
        self.test_path = test_path
        full_message = f"[Report] {message}"
        if test_path:
            full_message += f" (Test: '{test_path}')"
        super().__init__(full_message)


# 🔼⚙️
