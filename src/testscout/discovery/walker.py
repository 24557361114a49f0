# src/testscout/discovery/walker.py

"""
Recursive directory walk with file-name suffix filtering.
"""

import os
from typing import TypeAlias

import structlog

log = structlog.get_logger("discovery.walker")

# Absolute path -> itself. Insertion order is discovery order.
FileSet: TypeAlias = dict[str, str]


def walk(root: str, suffix: str) -> FileSet:
    """
    Collect every file below `root` whose name ends with `suffix`.

    Returns an empty FileSet when `root` is not a directory. Entries are
    visited in sorted name order. Files that disappear while walking, and
    symlinks that do not resolve, are skipped. Symlink cycles are not detected.
    """
    found: FileSet = {}
    if not os.path.isdir(root):
        return found

    try:
        names = sorted(os.listdir(root))
    except (FileNotFoundError, NotADirectoryError):
        log.debug("Directory vanished during walk", directory=root)
        return found
    except PermissionError:
        log.warning("Directory not readable, skipped", directory=root)
        return found

    for name in names:
        path = f"{root}/{name}"
        if os.path.isdir(path):
            found.update(walk(path, suffix))
            continue
        if not os.path.exists(path):
            continue
        if name.endswith(suffix):
            found[path] = path
    return found


# 🔼⚙️
