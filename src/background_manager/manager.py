"""
Wallpaper manager.

Implements the user-facing operations on top of a MonitorService and a
SettingsStore: capture, save, solid-color fallback and restore. The manager
keeps no state between calls and never writes to the console; every
operation returns a result object for the caller to report.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import WHITE
from .exceptions import AdapterError, NotFoundError
from .monitor_detection import DEFAULT_PLACEHOLDER, MonitorEnumerator
from .monitor_service import Bounds, DisplayTopology, MonitorService
from .snapshot import MonitorRecord, SettingsSnapshot
from .store import SettingsStore


@dataclass(frozen=True)
class MonitorFailure:
    """A per-monitor operation that failed and was skipped."""
    index: int
    monitor_id: str
    message: str


@dataclass
class SaveResult:
    """Outcome of a save."""
    path: Path
    snapshot: SettingsSnapshot


@dataclass
class BatchResult:
    """
    Outcome of a per-monitor batch (solid fallback or restore).
    
    Partial success is a normal outcome: failed monitors are listed in
    `failures` while the others are in `succeeded`.
    """
    background_color: int
    succeeded: List[MonitorRecord] = field(default_factory=list)
    failures: List[MonitorFailure] = field(default_factory=list)
    snapshot: Optional[SettingsSnapshot] = None  # Set by restore
    
    @property
    def restored_count(self) -> int:
        return len(self.succeeded)
    
    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failures)
    
    @property
    def ok(self) -> bool:
        return not self.failures


class WallpaperManager:
    """Orchestrates wallpaper capture, backup and restore."""
    
    def __init__(
        self,
        service: MonitorService,
        store: Optional[SettingsStore] = None,
        topology: Optional[DisplayTopology] = None,
        fallback_color: int = WHITE,
        placeholder: Bounds = DEFAULT_PLACEHOLDER,
    ) -> None:
        """
        Initialize the manager.
        
        Args:
            service: Open monitor service (owned by the caller)
            store: Backup file store (defaults to the home-directory file)
            topology: Display topology for primary detection and bounds fallback
            fallback_color: Background color applied by set_solid_fallback()
            placeholder: Bounds used when a monitor's geometry cannot be resolved
        """
        self.service = service
        self.store = store or SettingsStore()
        self.topology = topology or DisplayTopology()
        self.fallback_color = fallback_color
        self.placeholder = placeholder
        self.logger = logging.getLogger(__name__)
    
    @classmethod
    def from_config(cls, service: MonitorService, config, store: Optional[SettingsStore] = None) -> 'WallpaperManager':
        """Build a manager from a Config instance."""
        return cls(
            service=service,
            store=store or SettingsStore(config.get_backup_path()),
            fallback_color=config.fallback.color,
            placeholder=config.fallback.placeholder_bounds(),
        )
    
    @property
    def settings_path(self) -> Path:
        return self.store.path
    
    def get_monitors(self) -> List[MonitorRecord]:
        """Enumerate monitors with their current wallpaper and geometry."""
        return MonitorEnumerator(self.service, self.topology, self.placeholder).enumerate()
    
    def capture(self) -> SettingsSnapshot:
        """
        Capture the current wallpaper configuration. Does not modify OS state.
        
        Raises:
            AdapterError: If the service cannot report global settings or monitor ids
        """
        background_color = self.service.get_background_color()
        position = self.service.get_position()
        monitors = self.get_monitors()
        
        return SettingsSnapshot(
            background_color=background_color,
            position=position,
            monitors=tuple(monitors),
            saved_at=datetime.now(),
        )
    
    def save(self) -> SaveResult:
        """
        Capture the current configuration and write it to the backup file.
        
        Raises:
            PersistenceError: If the backup file cannot be written
        """
        snapshot = self.capture()
        path = self.store.save(snapshot)
        self.logger.info(f"Saved {len(snapshot.monitors)} monitors to {path}")
        return SaveResult(path=path, snapshot=snapshot)
    
    def set_solid_fallback(self) -> BatchResult:
        """
        Clear every monitor's wallpaper, exposing a solid background color.
        
        The color is set first; then each monitor is cleared independently.
        Running this twice leaves the same state as running it once.
        """
        monitors = self.get_monitors()
        
        self.service.set_background_color(self.fallback_color)
        
        result = BatchResult(background_color=self.fallback_color)
        for monitor in monitors:
            self._apply(monitor, "", result, action="clear wallpaper on")
        
        self.logger.info(
            f"Solid background {result.background_color:#08x} on "
            f"{result.restored_count}/{result.total} monitors"
        )
        return result
    
    def restore(self) -> BatchResult:
        """
        Restore the configuration saved in the backup file.
        
        Global color and position are applied first; then each monitor's
        wallpaper is restored independently. Monitors that no longer exist
        are reported as failures without stopping the others.
        
        Raises:
            NotFoundError: If no backup file exists
            FormatError: If the backup file is malformed
        """
        snapshot = self.store.load()
        if snapshot is None:
            raise NotFoundError(f"No saved settings found at: {self.store.path}")
        
        self.service.set_background_color(snapshot.background_color)
        self.service.set_position(snapshot.position)
        
        result = BatchResult(background_color=snapshot.background_color, snapshot=snapshot)
        for monitor in snapshot.monitors:
            self._apply(monitor, monitor.wallpaper_path, result, action="restore")
        
        self.logger.info(f"Restored {result.restored_count}/{result.total} monitors")
        return result
    
    def _apply(self, monitor: MonitorRecord, path: str, result: BatchResult, action: str) -> None:
        """Set one monitor's wallpaper, recording success or failure."""
        try:
            self.service.set_wallpaper(monitor.monitor_id, path)
        except AdapterError as e:
            self.logger.warning(f"Could not {action} monitor {monitor.index}: {e}")
            result.failures.append(MonitorFailure(
                index=monitor.index,
                monitor_id=monitor.monitor_id,
                message=str(e),
            ))
        else:
            result.succeeded.append(monitor)
