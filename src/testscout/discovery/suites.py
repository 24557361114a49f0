# src/testscout/discovery/suites.py

"""
Turns a SuiteConfig into concrete file sets on disk.
"""

import posixpath

import structlog
from attrs import define, field

from testscout.config.models import DirectoryEntry, SuiteConfig
from testscout.discovery.walker import FileSet, walk

log = structlog.get_logger("discovery.suites")


@define(frozen=True, slots=True)
class SuiteResolution:
    """Files eligible for affected/coverage matching, and files to execute."""
    whitelist_files: FileSet = field(factory=dict)
    test_files: FileSet = field(factory=dict)


def resolve_directory(root: str, directory: str) -> str:
    """
    Map a configured directory onto the project root.

    One leading "." is stripped, then only the final path component is kept:
    "./src" -> root/src, "module/tests" -> root/tests. Intermediate segments
    are dropped for compatibility with existing suite descriptions.
    """
    name = directory.strip()
    if name.startswith("."):
        name = name[1:]
    name = posixpath.basename(name.rstrip("/"))
    return f"{root}/{name}"


def files_for_entry(root: str, entry: DirectoryEntry) -> FileSet:
    """Walk one configured directory; entries without a suffix select nothing."""
    if not entry.is_selectable:
        return {}
    directory = resolve_directory(root, entry.directory)
    files = walk(directory, entry.suffix)
    if not files:
        log.debug(
            "No files matched directory entry",
            directory=directory,
            suffix=entry.suffix,
        )
    return files


def resolve(config: SuiteConfig, root: str) -> SuiteResolution:
    """Build the whitelist and test file sets for a suite description."""
    whitelist_files: FileSet = {}
    for entry in config.whitelist:
        whitelist_files.update(files_for_entry(root, entry))

    test_files: FileSet = {}
    for suite in config.test_suites:
        for entry in suite.directories:
            test_files.update(files_for_entry(root, entry))

    log.info(
        "Resolved suite description",
        whitelist_files=len(whitelist_files),
        test_files=len(test_files),
        emoji_key="discover",
    )
    return SuiteResolution(whitelist_files=whitelist_files, test_files=test_files)


# 🔼⚙️
