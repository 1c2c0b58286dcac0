"""
Configuration dataclasses for Background Manager.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..monitor_service import Bounds

WHITE = 0x00FFFFFF


@dataclass
class BackupConfig:
    """Backup file location."""
    path: Optional[str] = None  # None means ~/desktop_background_backup.json
    
    def get_path(self) -> Optional[Path]:
        """Expanded backup path, or None for the default location."""
        if not self.path:
            return None
        return Path(self.path).expanduser()


@dataclass
class FallbackConfig:
    """Values used when the wallpaper service cannot provide them."""
    color: int = WHITE  # Background color applied by "white"
    width: int = 1920  # Placeholder bounds for unresolvable monitors
    height: int = 1080
    
    def placeholder_bounds(self) -> Bounds:
        return Bounds(left=0, top=0, width=self.width, height=self.height)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
