#
# src/testscout/telemetry/__init__.py
#
"""
Logging and telemetry sub-package for testscout.
"""
from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
