#
# config/suite.py
#
"""
Parses the runner's XML configuration into a SuiteConfig.

Only two sections matter here: the coverage whitelist
(/phpunit/filter/whitelist/directory) and the test suites
(/phpunit/testsuites/testsuite/directory).
"""

import xml.etree.ElementTree as ET
from pathlib import Path

import structlog

from testscout.config.models import DirectoryEntry, SuiteConfig, TestSuiteEntry
from testscout.exceptions import ConfigParseError
from testscout.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.suite")

ROOT_TAG = "phpunit"
WHITELIST_XPATH = "./filter/whitelist/directory"
TESTSUITE_XPATH = "./testsuites/testsuite"


def _directory_entry(element: ET.Element) -> DirectoryEntry:
    return DirectoryEntry(directory=element.text or "", suffix=element.get("suffix"))


def parse_suite_config(text: str, source_path: Path | None = None) -> SuiteConfig:
    """
    Parse a suite description document.

    Raises:
        ConfigParseError: if the document is not well-formed XML or its root
            element is not the runner configuration root.
    """
    path_str = str(source_path) if source_path else None
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ConfigParseError("Malformed suite description", path=path_str, details=e) from e

    if root.tag != ROOT_TAG:
        raise ConfigParseError(
            f"Unexpected root element <{root.tag}>, expected <{ROOT_TAG}>", path=path_str
        )

    whitelist = [_directory_entry(el) for el in root.iterfind(WHITELIST_XPATH)]
    test_suites = [
        TestSuiteEntry(
            name=suite.get("name"),
            directories=[_directory_entry(el) for el in suite.iterfind("directory")],
        )
        for suite in root.iterfind(TESTSUITE_XPATH)
    ]

    log.debug(
        "Parsed suite description",
        path=path_str,
        whitelist_entries=len(whitelist),
        test_suites=len(test_suites),
    )
    return SuiteConfig(whitelist=whitelist, test_suites=test_suites, source_path=source_path)


def load_suite_config(path: Path) -> SuiteConfig:
    """Read and parse the suite description at `path`."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.error("Could not read suite description", path=str(path), error=str(e))
        raise ConfigParseError("Could not read suite description", path=str(path), details=e) from e
    return parse_suite_config(text, source_path=path)


# 🔼⚙️
