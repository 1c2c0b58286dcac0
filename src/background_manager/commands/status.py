"""Status command.

Shows the live wallpaper configuration without saving it. With
json_output the snapshot is printed in the backup file format.
"""

import json
import sys
from typing import Any, Dict, TextIO

from ..manager import WallpaperManager
from ..snapshot import MonitorRecord, SettingsSnapshot


def format_monitor(monitor: MonitorRecord, none_label: str = "(none/solid color)") -> str:
    """Two-line description of a monitor record."""
    primary = " (Primary)" if monitor.is_primary else ""
    wallpaper = monitor.wallpaper_path if monitor.has_wallpaper else none_label
    return (
        f"    Monitor {monitor.index}{primary}: {monitor.width}x{monitor.height} "
        f"at ({monitor.left},{monitor.top})\n"
        f"      Wallpaper: {wallpaper}"
    )


def print_summary(snapshot: SettingsSnapshot, out: TextIO, none_label: str = "(none/solid color)") -> None:
    """Print global settings followed by one entry per monitor."""
    print(f"  Background Color: {snapshot.color_hex}", file=out)
    print(f"  Position: {snapshot.position.label}", file=out)
    print(f"  Monitors: {len(snapshot.monitors)}", file=out)
    primary = snapshot.primary_monitor
    if primary is not None:
        print(f"  Primary: Monitor {primary.index}", file=out)
    for monitor in snapshot.monitors:
        print(format_monitor(monitor, none_label), file=out)


def get_status_json(manager: WallpaperManager) -> Dict[str, Any]:
    """
    Get live settings as a JSON-serializable dict.
    
    Same shape as the backup file, plus where that file lives and
    whether it exists.
    """
    status = manager.capture().to_dict()
    status["settingsFile"] = str(manager.settings_path)
    status["settingsFileExists"] = manager.store.exists()
    return status


def show_status(manager: WallpaperManager, out: TextIO = sys.stdout, json_output: bool = False) -> None:
    """
    Display current wallpaper settings.
    
    Args:
        manager: WallpaperManager with an open service
        out: Output stream
        json_output: If True, output JSON instead of human-readable text
    """
    if json_output:
        print(json.dumps(get_status_json(manager), indent=2), file=out)
        return
    
    snapshot = manager.capture()
    
    print("Current Settings:", file=out)
    print_summary(snapshot, out)
    
    if manager.store.exists():
        print(f"\nBackup file: {manager.settings_path}", file=out)
    else:
        print(f"\nBackup file: {manager.settings_path} (not saved yet)", file=out)
