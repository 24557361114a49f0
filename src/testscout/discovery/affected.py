# src/testscout/discovery/affected.py

"""
Narrows the whitelist to the files touched by the change under test.
"""

from collections.abc import Iterable

import structlog

from testscout.discovery.walker import FileSet

log = structlog.get_logger("discovery.affected")


def match(whitelist_files: FileSet, changed_paths: Iterable[str], root: str) -> FileSet:
    """
    Intersect the changed paths with the whitelist.

    When no changed path is whitelisted the full whitelist is returned, so an
    unrelated change still reports over every whitelisted file.
    """
    selected: FileSet = {}
    for path in changed_paths:
        file_path = f"{root}/{path}"
        if file_path in whitelist_files:
            selected[file_path] = file_path

    if selected:
        log.debug("Affected set narrowed to changed files", affected=len(selected))
        return selected

    log.debug(
        "No changed path is whitelisted, keeping full whitelist",
        whitelist_files=len(whitelist_files),
    )
    return dict(whitelist_files)


# 🔼⚙️
