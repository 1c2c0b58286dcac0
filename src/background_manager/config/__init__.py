"""
Configuration package for Background Manager.
"""

from .main import Config
from .dataclasses import (
    WHITE,
    BackupConfig,
    FallbackConfig,
    LoggingConfig,
)

__all__ = ["Config", "WHITE", "BackupConfig", "FallbackConfig", "LoggingConfig"]
