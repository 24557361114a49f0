# src/testscout/runtime/context.py

"""
Immutable per-run state and its preparation from host configuration.
"""

import os
import shutil
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import structlog
from attrs import define, field

from testscout.exceptions import ConfigFileNotFoundError, RunnerNotFoundError
from testscout.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.context")

RUNNER_CONFIG_KEY = "unit.runner.config"
RUNNER_BINARY_KEY = "unit.runner.binary"
DEFAULT_RUNNER_BINARY = "phpunit"
DEFAULT_CONFIG_NAMES = ("phpunit.xml", "phpunit.xml.dist")

# Key names used by existing arcanist configurations, consulted after ours.
LEGACY_KEYS = {
    RUNNER_CONFIG_KEY: ("phpunit_config",),
    RUNNER_BINARY_KEY: ("unit.phpunit.binary",),
}


@runtime_checkable
class ConfigLookup(Protocol):
    """Host capability returning a configuration value by key, or None."""

    def get_config_from_any_source(self, key: str) -> Any | None:
        ...


@define(frozen=True, slots=True)
class RunContext:
    """Everything a run needs, fixed once resolved. Stages derive new copies."""
    project_root: str = field()
    changed_paths: tuple[str, ...] = field(factory=tuple, converter=tuple)
    config_file: str | None = field(default=None)
    runner_binary: str = field(default=DEFAULT_RUNNER_BINARY)
    coverage_enabled: bool = field(default=False)
    affected_files: Mapping[str, str] = field(factory=dict)


def normalize_root(project_root: str | os.PathLike) -> str:
    return os.path.abspath(os.fspath(project_root)).rstrip("/") or "/"


def resolve_config_file(project_root: str, configured: str | None) -> str:
    """
    Locate the runner config file.

    A configured value is tried relative to the project root first, then as
    given. Without one, the runner's default file names are tried in the root.
    """
    if configured:
        candidates = [f"{project_root}/{configured}", configured]
        for candidate in candidates:
            if os.path.exists(candidate):
                return candidate
        raise ConfigFileNotFoundError(
            "Runner configuration file was not found", path=f"{project_root}/{configured}"
        )

    for name in DEFAULT_CONFIG_NAMES:
        candidate = f"{project_root}/{name}"
        if os.path.exists(candidate):
            return candidate
    raise ConfigFileNotFoundError(
        f"No runner configuration file configured ('{RUNNER_CONFIG_KEY}') "
        f"and none of {list(DEFAULT_CONFIG_NAMES)} found",
        path=project_root,
    )


def resolve_runner_binary(project_root: str, configured: str | None) -> str:
    """
    Resolve the runner binary.

    A configured binary found on PATH (or relative to the working directory)
    is used; otherwise it must be an executable file relative to the project
    root.
    """
    if not configured:
        return DEFAULT_RUNNER_BINARY
    found = shutil.which(configured)
    if found:
        return os.path.abspath(found)
    resolved = os.path.normpath(os.path.join(project_root, configured))
    if os.path.isfile(resolved) and os.access(resolved, os.X_OK):
        return resolved
    raise RunnerNotFoundError("Runner binary could not be found or resolved", path=resolved)


def lookup_config_value(config: ConfigLookup, key: str) -> str | None:
    """First value found under `key`, then under its legacy names."""
    for name in (key, *LEGACY_KEYS.get(key, ())):
        value = config.get_config_from_any_source(name)
        if value is not None and value != "":
            if name != key:
                log.debug("Using legacy configuration key", key=name, replaces=key)
            return str(value)
    return None


def prepare_context(
    project_root: str | os.PathLike,
    changed_paths: Iterable[str],
    config: ConfigLookup,
    coverage_enabled: bool = False,
) -> RunContext:
    """Build the RunContext, failing fast on configuration problems."""
    root = normalize_root(project_root)
    config_file = resolve_config_file(root, lookup_config_value(config, RUNNER_CONFIG_KEY))
    runner_binary = resolve_runner_binary(root, lookup_config_value(config, RUNNER_BINARY_KEY))

    context = RunContext(
        project_root=root,
        changed_paths=tuple(changed_paths),
        config_file=config_file,
        runner_binary=runner_binary,
        coverage_enabled=coverage_enabled,
    )
    log.info(
        "Run context prepared",
        project_root=root,
        config_file=config_file,
        runner_binary=runner_binary,
        coverage=coverage_enabled,
        changed_paths=len(context.changed_paths),
        emoji_key="config",
    )
    return context


# 🔼⚙️
