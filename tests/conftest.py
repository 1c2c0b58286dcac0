"""Test configuration and fixtures.

Provides an in-memory MonitorService so the manager, enumeration and CLI
can be exercised without the Windows wallpaper service.
"""

import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional, Set

import pytest

from background_manager.exceptions import AdapterError
from background_manager.manager import WallpaperManager
from background_manager.monitor_service import Bounds, MonitorService, Screen, WallpaperPosition
from background_manager.store import SettingsStore


class FakeMonitor:
    """One monitor known to the fake service."""
    
    def __init__(
        self,
        monitor_id: str,
        bounds: Optional[Bounds],
        wallpaper: Optional[str] = "",
    ) -> None:
        self.monitor_id = monitor_id
        self.bounds = bounds  # None: bounds query fails
        self.wallpaper = wallpaper  # None: wallpaper query fails


class FakeMonitorService(MonitorService):
    """In-memory MonitorService recording every mutation."""
    
    def __init__(
        self,
        monitors: List[FakeMonitor],
        background_color: int = 0x000000,
        position: WallpaperPosition = WallpaperPosition.FILL,
    ) -> None:
        super().__init__()
        self.monitors = monitors
        self.background_color = background_color
        self.position = position
        self.failing_ids: Set[str] = set()
        self.calls: List[tuple] = []
        self.release_count = 0
    
    def _check_open(self) -> None:
        if self.closed:
            raise AdapterError("Monitor service used after close")
    
    def _find(self, monitor_id: str) -> FakeMonitor:
        self._check_open()
        for monitor in self.monitors:
            if monitor.monitor_id == monitor_id:
                return monitor
        raise AdapterError(f"Unknown monitor id: {monitor_id}")
    
    def monitor_count(self) -> int:
        self._check_open()
        return len(self.monitors)
    
    def monitor_id_at(self, index: int) -> str:
        self._check_open()
        if index < 0 or index >= len(self.monitors):
            raise AdapterError(f"Monitor index {index} out of range")
        return self.monitors[index].monitor_id
    
    def get_wallpaper(self, monitor_id: str) -> str:
        monitor = self._find(monitor_id)
        if monitor.wallpaper is None:
            raise AdapterError(f"No wallpaper set on {monitor_id}")
        return monitor.wallpaper
    
    def get_monitor_bounds(self, monitor_id: str) -> Bounds:
        monitor = self._find(monitor_id)
        if monitor.bounds is None:
            raise AdapterError(f"Cannot resolve bounds for {monitor_id}")
        return monitor.bounds
    
    def get_background_color(self) -> int:
        self._check_open()
        return self.background_color
    
    def set_background_color(self, color: int) -> None:
        self._check_open()
        self.calls.append(("set_background_color", color))
        self.background_color = color
    
    def get_position(self) -> WallpaperPosition:
        self._check_open()
        return self.position
    
    def set_position(self, position: WallpaperPosition) -> None:
        self._check_open()
        self.calls.append(("set_position", position))
        self.position = position
    
    def set_wallpaper(self, monitor_id: str, path: str) -> None:
        self._check_open()
        self.calls.append(("set_wallpaper", monitor_id, path))
        if monitor_id in self.failing_ids:
            raise AdapterError(f"SetWallpaper failed for {monitor_id}")
        self._find(monitor_id).wallpaper = path
    
    def wallpapers(self) -> Dict[str, Optional[str]]:
        return {m.monitor_id: m.wallpaper for m in self.monitors}
    
    def _release(self) -> None:
        self.release_count += 1


class FakeTopology:
    """Display topology returning a fixed screen list."""
    
    def __init__(self, screens: Optional[List[Screen]] = None) -> None:
        self._screens = screens or []
        self.query_count = 0
    
    def screens(self) -> List[Screen]:
        self.query_count += 1
        return list(self._screens)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory removed after the test."""
    with tempfile.TemporaryDirectory() as temp:
        yield Path(temp)


@pytest.fixture
def backup_path(temp_dir: Path) -> Path:
    return temp_dir / "desktop_background_backup.json"


@pytest.fixture
def store(backup_path: Path) -> SettingsStore:
    return SettingsStore(backup_path)


def _two_monitor_service() -> FakeMonitorService:
    """Primary 1920x1080 at the origin and a 1280x1024 monitor to its right."""
    return FakeMonitorService(
        monitors=[
            FakeMonitor("\\\\?\\DISPLAY#A#1", Bounds(0, 0, 1920, 1080), "C:\\Wallpapers\\mountain.jpg"),
            FakeMonitor("\\\\?\\DISPLAY#B#2", Bounds(1920, 0, 1280, 1024), "C:\\Wallpapers\\ocean.png"),
        ],
        background_color=0x00FFFFFF,
        position=WallpaperPosition.FILL,
    )


@pytest.fixture
def two_monitor_service() -> FakeMonitorService:
    return _two_monitor_service()


@pytest.fixture
def make_two_monitor_service():
    """Factory for fresh two-monitor services, one per CLI invocation."""
    return _two_monitor_service


@pytest.fixture
def two_screen_topology() -> FakeTopology:
    return FakeTopology([
        Screen(x=0, y=0, width=1920, height=1080, is_primary=True, name="DISPLAY1"),
        Screen(x=1920, y=0, width=1280, height=1024, is_primary=False, name="DISPLAY2"),
    ])


def _three_monitor_service() -> FakeMonitorService:
    return FakeMonitorService(
        monitors=[
            FakeMonitor("MON-0", Bounds(0, 0, 1920, 1080), "C:\\wp\\zero.jpg"),
            FakeMonitor("MON-1", Bounds(1920, 0, 1920, 1080), "C:\\wp\\one.jpg"),
            FakeMonitor("MON-2", Bounds(3840, 0, 1920, 1080), ""),
        ],
        background_color=0x00112233,
        position=WallpaperPosition.SPAN,
    )


@pytest.fixture
def three_monitor_service() -> FakeMonitorService:
    return _three_monitor_service()


@pytest.fixture
def make_three_monitor_service():
    """Factory for fresh three-monitor services, one per CLI invocation."""
    return _three_monitor_service


@pytest.fixture
def manager(two_monitor_service, store, two_screen_topology) -> WallpaperManager:
    return WallpaperManager(two_monitor_service, store=store, topology=two_screen_topology)


@pytest.fixture
def make_service():
    """
    Factory for fake services.
    
    Each spec is (monitor_id, bounds, wallpaper); bounds or wallpaper set
    to None make the corresponding query fail.
    """
    def _make(specs, background_color: int = 0x000000, position: WallpaperPosition = WallpaperPosition.FILL):
        monitors = [FakeMonitor(monitor_id, bounds, wallpaper) for monitor_id, bounds, wallpaper in specs]
        return FakeMonitorService(monitors, background_color=background_color, position=position)
    return _make


@pytest.fixture
def make_topology():
    """Factory for fake display topologies."""
    return FakeTopology
