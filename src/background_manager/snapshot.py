"""
Wallpaper settings snapshot model.

A SettingsSnapshot is the complete wallpaper state at one point in time:
global background color and fit mode, plus one MonitorRecord per monitor.
Snapshots are immutable; a fresh one is built on every capture.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .exceptions import FormatError
from .monitor_service import Bounds, WallpaperPosition


def _field(data: Dict[str, Any], key: str, expected: type, context: str) -> Any:
    """Fetch a required field and check its JSON type."""
    if key not in data:
        raise FormatError(f"{context}: missing field '{key}'")
    value = data[key]
    # bool is an int subclass; keep them apart in both directions
    if expected is int and isinstance(value, bool):
        raise FormatError(f"{context}: field '{key}' must be an integer, got {value!r}")
    if not isinstance(value, expected):
        raise FormatError(
            f"{context}: field '{key}' must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class MonitorRecord:
    """Wallpaper state of a single monitor."""
    index: int  # 0-based enumeration order
    monitor_id: str  # Opaque service identifier (device path on Windows)
    wallpaper_path: str = ""  # Empty means no image / solid color
    left: int = 0
    top: int = 0
    width: int = 0
    height: int = 0
    is_primary: bool = False
    
    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Monitor index must be non-negative, got {self.index}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Monitor {self.index}: size {self.width}x{self.height} must be non-negative")
    
    @property
    def bounds(self) -> Bounds:
        return Bounds(left=self.left, top=self.top, width=self.width, height=self.height)
    
    @property
    def has_wallpaper(self) -> bool:
        return bool(self.wallpaper_path)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "index": self.index,
            "monitorId": self.monitor_id,
            "wallpaperPath": self.wallpaper_path,
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
            "isPrimary": self.is_primary,
        }
    
    @classmethod
    def from_dict(cls, data: Any) -> 'MonitorRecord':
        """
        Create from JSON dict.
        
        Raises:
            FormatError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise FormatError(f"Monitor entry must be an object, got {type(data).__name__}")
        
        index = _field(data, "index", int, "Monitor entry")
        context = f"Monitor {index}"
        width = _field(data, "width", int, context)
        height = _field(data, "height", int, context)
        if index < 0 or width < 0 or height < 0:
            raise FormatError(f"{context}: index, width and height must be non-negative")
        
        return cls(
            index=index,
            monitor_id=_field(data, "monitorId", str, context),
            wallpaper_path=_field(data, "wallpaperPath", str, context),
            left=_field(data, "left", int, context),
            top=_field(data, "top", int, context),
            width=width,
            height=height,
            is_primary=_field(data, "isPrimary", bool, context),
        )


@dataclass(frozen=True)
class SettingsSnapshot:
    """Complete wallpaper configuration captured at `saved_at`."""
    background_color: int
    position: WallpaperPosition
    monitors: Tuple[MonitorRecord, ...] = field(default_factory=tuple)
    saved_at: datetime = field(default_factory=datetime.now)
    
    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.monitors, tuple):
            object.__setattr__(self, "monitors", tuple(self.monitors))
        if not 0 <= self.background_color <= 0xFFFFFF:
            raise ValueError(f"Background color {self.background_color:#x} is not a 24-bit value")
        indices = [m.index for m in self.monitors]
        if indices != list(range(len(indices))):
            raise ValueError(f"Monitor indices must run 0..N-1 in order, got {indices}")
    
    @property
    def color_hex(self) -> str:
        """Background color formatted as #RRGGBB-style hex."""
        return f"#{self.background_color:06X}"
    
    @property
    def primary_monitor(self) -> Optional[MonitorRecord]:
        """First monitor flagged primary, or None."""
        return next((m for m in self.monitors if m.is_primary), None)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "backgroundColor": self.background_color,
            "position": self.position.label,
            "monitors": [m.to_dict() for m in self.monitors],
            "savedAt": self.saved_at.isoformat(),
        }
    
    @classmethod
    def from_dict(cls, data: Any) -> 'SettingsSnapshot':
        """
        Create from JSON dict.
        
        Raises:
            FormatError: If the document does not describe a valid snapshot
        """
        if not isinstance(data, dict):
            raise FormatError(f"Settings must be a JSON object, got {type(data).__name__}")
        
        context = "Settings"
        color = _field(data, "backgroundColor", int, context)
        if not 0 <= color <= 0xFFFFFF:
            raise FormatError(f"Settings: backgroundColor {color} out of range")
        
        position_name = _field(data, "position", str, context)
        try:
            position = WallpaperPosition.from_label(position_name)
        except ValueError as e:
            raise FormatError(f"Settings: {e}") from e
        
        saved_at_text = _field(data, "savedAt", str, context)
        try:
            saved_at = datetime.fromisoformat(saved_at_text)
        except ValueError as e:
            raise FormatError(f"Settings: invalid savedAt timestamp {saved_at_text!r}") from e
        
        monitors_data = _field(data, "monitors", list, context)
        monitors = tuple(MonitorRecord.from_dict(m) for m in monitors_data)
        
        indices = [m.index for m in monitors]
        if len(set(indices)) != len(indices):
            raise FormatError(f"Settings: duplicate monitor indices {indices}")
        if indices != list(range(len(indices))):
            raise FormatError(f"Settings: monitor indices must run 0..N-1 in order, got {indices}")
        
        return cls(
            background_color=color,
            position=position,
            monitors=monitors,
            saved_at=saved_at,
        )
