#
# config/__init__.py
#
"""
Configuration handling sub-package for testscout.

Exports the loading functions and core configuration models.
"""

from .loader import LayeredConfig, env_var_for_key, load_config
from .models import (
    DirectoryEntry,
    GlobalConfig,
    SuiteConfig,
    TestScoutConfig,
    TestSuiteEntry,
)
from .suite import load_suite_config, parse_suite_config

__all__ = [
    "DirectoryEntry",
    "GlobalConfig",
    "LayeredConfig",
    "SuiteConfig",
    "TestScoutConfig",
    "TestSuiteEntry",
    "env_var_for_key",
    "load_config",
    "load_suite_config",
    "parse_suite_config",
]

# 🔼⚙️
