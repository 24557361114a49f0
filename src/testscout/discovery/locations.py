# src/testscout/discovery/locations.py

"""
Where might the tests for a given source file live?

For "/a/b/c/X.ext" the candidates are, in order:

    /a/b/c/                       the file's own directory
    /a/b/c/tests/ ... /tests/     a tests/ directory in any ancestor
    /a/b/tests/ /a/tests/c/ ...   each component replaced by tests/
    /a/b/tests/c/ ... /tests/a/b/c/
                                  tests/ inserted above each component

Each "tests" variant is tried as "tests" and "Tests". The result is a plain
string transformation so callers can prune it against the filesystem.
"""

import posixpath

TEST_DIR_NAMES = ("tests", "Tests")
SEP = "/"


def _split_dir(path: str) -> tuple[str, bool, list[str]]:
    directory = posixpath.dirname(path) or "."
    is_absolute = directory.startswith(SEP)
    parts = [part for part in directory.split(SEP) if part and part != "."]
    return directory, is_absolute, parts


def _join(parts: list[str], is_absolute: bool) -> str:
    joined = SEP.join(part for part in parts if part)
    if is_absolute:
        joined = SEP + joined
    return joined.rstrip(SEP) + SEP if joined.strip(SEP) else (SEP if is_absolute else "")


def locate(path: str) -> list[str]:
    """Return candidate test directories for `path`, most specific first."""
    directory, is_absolute, parts = _split_dir(path)

    candidates: list[str] = [directory.rstrip(SEP) + SEP]

    # tests/ in the directory itself and every ancestor, up to the root.
    for depth in range(len(parts), -1, -1):
        ancestor = parts[:depth]
        for name in TEST_DIR_NAMES:
            candidates.append(_join([*ancestor, name], is_absolute))

    # Replace one component with tests/.
    for index in reversed(range(len(parts))):
        for name in TEST_DIR_NAMES:
            attempt = list(parts)
            attempt[index] = name
            candidates.append(_join(attempt, is_absolute))

    # Insert tests/ above one component.
    for index in reversed(range(len(parts))):
        for name in TEST_DIR_NAMES:
            attempt = list(parts)
            attempt[index] = f"{name}{SEP}{attempt[index]}"
            candidates.append(_join(attempt, is_absolute))

    return list(dict.fromkeys(candidates))


# 🔼⚙️
