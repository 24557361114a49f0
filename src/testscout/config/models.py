#
# config/models.py
#
"""
Attrs-based data models for testscout configuration structure.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from attrs import define, field
from attrs.validators import optional


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if not isinstance(value, str) or value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _to_tuple(value: Any) -> tuple:
    return tuple(value) if value is not None else ()


# --- Suite description models ---
@define(frozen=True, slots=True)
class DirectoryEntry:
    """
    One configured directory and the file-name suffix selecting files in it.

    An entry without a suffix selects nothing.
    """
    directory: str = field()
    suffix: str | None = field(default=None)

    @property
    def is_selectable(self) -> bool:
        return bool(self.suffix)


@define(frozen=True, slots=True)
class TestSuiteEntry:
    """A named group of directories whose matching files are executed as tests."""
    __test__ = False

    directories: tuple[DirectoryEntry, ...] = field(factory=tuple, converter=_to_tuple)
    name: str | None = field(default=None)


@define(frozen=True, slots=True)
class SuiteConfig:
    """Parsed suite description: whitelist directories plus test suites."""
    whitelist: tuple[DirectoryEntry, ...] = field(factory=tuple, converter=_to_tuple)
    test_suites: tuple[TestSuiteEntry, ...] = field(factory=tuple, converter=_to_tuple)
    source_path: Path | None = field(default=None)


# --- Project configuration models ---
@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for testscout."""
    # None leaves the level to the CLI option or the command default.
    log_level: str | None = field(default=None, validator=optional(_validate_log_level))


@define(frozen=True, slots=True)
class TestScoutConfig:
    """Root configuration object loaded from a testscout.conf file."""
    __test__ = False

    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})
    # Remaining tables flattened to dotted keys, e.g. "unit.runner.binary".
    values: Mapping[str, Any] = field(factory=dict)
    config_file_path: Path | None = field(default=None)


# 🔼⚙️
