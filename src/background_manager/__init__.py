"""
Background Manager - per-monitor desktop wallpaper backup and restore.

Capture the wallpaper, fit mode and background color of every monitor,
save them to a JSON file, and restore them later.
"""

__version__ = "0.1.0"

from .config import Config
from .exceptions import (
    BackgroundManagerError,
    AdapterError,
    PersistenceError,
    FormatError,
    NotFoundError,
)
from .manager import WallpaperManager, BatchResult, SaveResult, MonitorFailure
from .monitor_detection import MonitorEnumerator, enumerate_monitors
from .monitor_service import (
    Bounds,
    DisplayTopology,
    MonitorService,
    WallpaperPosition,
    open_monitor_service,
)
from .snapshot import MonitorRecord, SettingsSnapshot
from .store import SettingsStore

__all__ = [
    "Config",
    "BackgroundManagerError",
    "AdapterError",
    "PersistenceError",
    "FormatError",
    "NotFoundError",
    "WallpaperManager",
    "BatchResult",
    "SaveResult",
    "MonitorFailure",
    "MonitorEnumerator",
    "enumerate_monitors",
    "Bounds",
    "DisplayTopology",
    "MonitorService",
    "WallpaperPosition",
    "open_monitor_service",
    "MonitorRecord",
    "SettingsSnapshot",
    "SettingsStore",
]
