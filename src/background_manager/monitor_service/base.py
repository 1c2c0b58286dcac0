"""
Monitor service abstraction.

The OS wallpaper-control service is reached through a MonitorService
implementation. The manager and enumeration code depend only on this
interface, so they can run against an in-memory service in tests.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class WallpaperPosition(IntEnum):
    """How a wallpaper image is fitted to a monitor (DESKTOP_WALLPAPER_POSITION)."""
    CENTER = 0
    TILE = 1
    STRETCH = 2
    FIT = 3
    FILL = 4
    SPAN = 5
    
    @property
    def label(self) -> str:
        """Symbolic name used in the backup file (e.g. "Fill")."""
        return self.name.capitalize()
    
    @classmethod
    def from_label(cls, label: str) -> 'WallpaperPosition':
        """
        Parse a symbolic position name.
        
        Args:
            label: Position name, case-insensitive (e.g. "Fill", "span")
            
        Returns:
            Matching WallpaperPosition
            
        Raises:
            ValueError: If the name is not a known position
        """
        try:
            return cls[label.strip().upper()]
        except (KeyError, AttributeError):
            valid = [p.label for p in cls]
            raise ValueError(f"Unknown wallpaper position: {label!r}. Valid: {valid}")


@dataclass(frozen=True)
class Bounds:
    """Monitor bounds in virtual-screen coordinates."""
    left: int
    top: int
    width: int
    height: int
    
    @classmethod
    def from_rect(cls, left: int, top: int, right: int, bottom: int) -> 'Bounds':
        """Build bounds from a RECT, clamping inverted edges to zero size."""
        return cls(
            left=left,
            top=top,
            width=max(right - left, 0),
            height=max(bottom - top, 0),
        )


class MonitorService(ABC):
    """
    Abstract capability set over the OS wallpaper-control service.
    
    Every setter is an immediate OS mutation; there is no rollback.
    Services are context managers: the handle is released exactly once
    when the block exits, whatever the exit path.
    """
    
    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._closed = False
    
    @abstractmethod
    def monitor_count(self) -> int:
        """Number of monitors currently known to the service."""
        pass
    
    @abstractmethod
    def monitor_id_at(self, index: int) -> str:
        """
        Opaque identifier for the monitor at enumeration position `index`.
        
        Raises:
            AdapterError: If index is out of range
        """
        pass
    
    @abstractmethod
    def get_wallpaper(self, monitor_id: str) -> str:
        """
        Current wallpaper path for a monitor ("" for none/solid color).
        
        Raises:
            AdapterError: If the service cannot report a wallpaper. Callers
                treat this as "no wallpaper".
        """
        pass
    
    @abstractmethod
    def get_monitor_bounds(self, monitor_id: str) -> Bounds:
        """
        Bounds of a monitor.
        
        Raises:
            AdapterError: If the service cannot resolve bounds for the id
        """
        pass
    
    @abstractmethod
    def get_background_color(self) -> int:
        """Desktop background color as a packed 24-bit value."""
        pass
    
    @abstractmethod
    def set_background_color(self, color: int) -> None:
        """Set the desktop background color."""
        pass
    
    @abstractmethod
    def get_position(self) -> WallpaperPosition:
        """Current wallpaper fit mode."""
        pass
    
    @abstractmethod
    def set_position(self, position: WallpaperPosition) -> None:
        """Set the wallpaper fit mode."""
        pass
    
    @abstractmethod
    def set_wallpaper(self, monitor_id: str, path: str) -> None:
        """
        Set the wallpaper image for a monitor.
        
        Args:
            monitor_id: Identifier from monitor_id_at()
            path: Absolute image path, or "" to clear the image and expose
                the background color
                
        Raises:
            AdapterError: On an invalid monitor id or unreadable path
        """
        pass
    
    def _release(self) -> None:
        """Release the underlying service handle. Called once by close()."""
        pass
    
    def close(self) -> None:
        """Release the service handle. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._release()
        self.logger.debug("Monitor service released")
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    def __enter__(self) -> 'MonitorService':
        return self
    
    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None
