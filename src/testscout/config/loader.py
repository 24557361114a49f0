#
# config/loader.py
#
"""
Loads the TOML project configuration and layers it with other sources.

Precedence: CLI options > Environment Variables > Config File > Defaults.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from testscout.config.models import GlobalConfig, TestScoutConfig
from testscout.exceptions import ConfigParseError
from testscout.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.loader")

ENV_PREFIX = "TESTSCOUT_"
GLOBAL_TABLE = "global"


def _flatten(table: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested TOML tables into dotted keys."""
    flat: dict[str, Any] = {}
    for key, value in table.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def env_var_for_key(key: str) -> str:
    """Return the environment variable overriding a dotted config key."""
    return ENV_PREFIX + key.upper().replace(".", "_").replace("-", "_")


def _global_config(table: Mapping[str, Any], path: str | None) -> GlobalConfig:
    """Build the [global] settings, letting TESTSCOUT_LOG_LEVEL override the file."""
    env_log_level = os.environ.get(env_var_for_key("log_level"))
    if env_log_level:
        table = {**table, "log_level": env_log_level}
    try:
        return GlobalConfig(**table)
    except (TypeError, ValueError) as e:
        raise ConfigParseError(f"Invalid [global] settings: {e}", path=path, details=e) from e


def load_config(config_path: Path | None) -> TestScoutConfig:
    """
    Load a testscout.conf file into a TestScoutConfig.

    A missing file yields an empty configuration; unreadable or invalid TOML
    raises ConfigParseError.
    """
    if config_path is None or not config_path.is_file():
        log.debug("No project config file found, using defaults", path=str(config_path))
        return TestScoutConfig(global_config=_global_config({}, None), config_file_path=None)

    load_log = log.bind(path=str(config_path))
    try:
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as e:
        load_log.error("Invalid TOML in config file", error=str(e))
        raise ConfigParseError("Invalid TOML in config file", path=str(config_path), details=e) from e
    except OSError as e:
        load_log.error("Could not read config file", error=str(e))
        raise ConfigParseError("Could not read config file", path=str(config_path), details=e) from e

    global_table = data.pop(GLOBAL_TABLE, {})
    if not isinstance(global_table, Mapping):
        raise ConfigParseError("'global' must be a table", path=str(config_path))

    config = TestScoutConfig(
        global_config=_global_config(global_table, str(config_path)),
        values=_flatten(data),
        config_file_path=config_path,
    )
    load_log.info("Configuration loaded", keys=sorted(config.values), emoji_key="config")
    return config


class LayeredConfig:
    """
    Key lookup across ordered configuration sources, first match wins.

    Implements the ConfigLookup protocol consumed by the engine.
    """

    def __init__(self, *sources: Mapping[str, Any]):
        self._sources = [source for source in sources if source is not None]

    @classmethod
    def from_sources(
        cls,
        config: TestScoutConfig | None = None,
        overrides: Mapping[str, Any] | None = None,
        defaults: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "LayeredConfig":
        """Build the standard CLI > env > file > defaults stack."""
        cli_layer = {k: v for k, v in (overrides or {}).items() if v is not None}
        env_layer = _EnvironmentLayer(os.environ if environ is None else environ)
        file_layer = dict(config.values) if config else {}
        return cls(cli_layer, env_layer, file_layer, dict(defaults or {}))

    def get_config_from_any_source(self, key: str) -> Any | None:
        for source in self._sources:
            value = source.get(key)
            if value is not None and value != "":
                return value
        return None

    def as_dict(self, keys: list[str] | None = None) -> dict[str, Any]:
        """Resolved view of the given keys, or of every key the file and CLI layers know."""
        if keys is None:
            known: list[str] = []
            for source in self._sources:
                if isinstance(source, _EnvironmentLayer):
                    continue
                known.extend(k for k in source if k not in known)
            keys = known
        return {key: self.get_config_from_any_source(key) for key in keys}


class _EnvironmentLayer(Mapping):
    """Read-only view mapping dotted keys onto TESTSCOUT_* variables."""

    def __init__(self, environ: Mapping[str, str]):
        self._environ = environ

    def __getitem__(self, key: str) -> str:
        return self._environ[env_var_for_key(key)]

    def __iter__(self):
        return iter(())

    def __len__(self) -> int:
        return 0

    def get(self, key: str, default: Any = None) -> Any:
        return self._environ.get(env_var_for_key(key), default)


# 🔼⚙️
