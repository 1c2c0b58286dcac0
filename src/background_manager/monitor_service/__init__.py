"""Monitor service adapters for the OS wallpaper-control service."""

import sys

from ..exceptions import ServiceUnavailableError
from .base import Bounds, MonitorService, WallpaperPosition
from .topology import DisplayTopology, Screen


def open_monitor_service() -> MonitorService:
    """
    Acquire the wallpaper service for the current platform.
    
    Returns:
        MonitorService to be used as a context manager
        
    Raises:
        ServiceUnavailableError: If the platform has no supported service
    """
    if sys.platform != "win32":
        raise ServiceUnavailableError(
            f"Per-monitor wallpaper control is not supported on {sys.platform}.\n"
            "Background Manager requires the Windows IDesktopWallpaper service."
        )
    
    try:
        from .desktop_wallpaper import DesktopWallpaperService
    except ImportError as e:
        raise ServiceUnavailableError(str(e)) from e
    
    return DesktopWallpaperService()


__all__ = [
    "Bounds",
    "MonitorService",
    "WallpaperPosition",
    "DisplayTopology",
    "Screen",
    "open_monitor_service",
]
