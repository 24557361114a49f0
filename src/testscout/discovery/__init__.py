#
# src/testscout/discovery/__init__.py
#
"""
Test and source file discovery: directory walking, suite resolution,
affected-file matching and the test location heuristic.
"""
from .affected import match as match_affected
from .locations import locate
from .suites import SuiteResolution, resolve, resolve_directory
from .walker import FileSet, walk

__all__ = [
    "FileSet",
    "SuiteResolution",
    "locate",
    "match_affected",
    "resolve",
    "resolve_directory",
    "walk",
]

# 🔼⚙️
