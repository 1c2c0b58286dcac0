"""Save, solid-color and restore commands."""

import logging
import sys
from pathlib import PureWindowsPath
from typing import TextIO

from ..config import WHITE
from ..exceptions import NotFoundError
from ..manager import BatchResult, WallpaperManager
from .status import print_summary

logger = logging.getLogger(__name__)


def _print_failures(result: BatchResult, verb: str, out: TextIO) -> None:
    for failure in result.failures:
        print(f"  Warning: Could not {verb} Monitor {failure.index}: {failure.message}", file=out)


def save_settings(manager: WallpaperManager, out: TextIO = sys.stdout) -> None:
    """Save current background settings to the backup file."""
    result = manager.save()
    
    print(f"Settings saved to: {result.path}", file=out)
    print_summary(result.snapshot, out, none_label="(none)")


def set_solid_white(manager: WallpaperManager, out: TextIO = sys.stdout) -> None:
    """Clear every monitor's wallpaper and show the fallback background color."""
    result = manager.set_solid_fallback()
    
    for monitor in result.succeeded:
        print(f"  Cleared wallpaper on Monitor {monitor.index}", file=out)
    _print_failures(result, "clear", out)
    
    if result.background_color == WHITE:
        color_name = "solid white"
    else:
        color_name = f"solid color #{result.background_color:06X}"
    print(f"\nBackground set to {color_name} on {result.restored_count} monitor(s)!", file=out)
    if result.failures:
        print(f"  {len(result.failures)} monitor(s) could not be cleared", file=out)


def restore_settings(manager: WallpaperManager, out: TextIO = sys.stdout) -> None:
    """
    Restore settings from the backup file.
    
    A missing backup file is reported as guidance, not as an error.
    """
    try:
        result = manager.restore()
    except NotFoundError:
        logger.info(f"Nothing to restore from {manager.settings_path}")
        print(f"No saved settings found at: {manager.settings_path}", file=out)
        print("Run with 'save' first to backup your settings.", file=out)
        return
    
    for monitor in result.succeeded:
        if monitor.wallpaper_path:
            name = PureWindowsPath(monitor.wallpaper_path).name or monitor.wallpaper_path
        else:
            name = "(solid color)"
        print(f"  Restored Monitor {monitor.index}: {name}", file=out)
    _print_failures(result, "restore", out)
    
    print(f"\nSettings restored for {result.restored_count} monitor(s)!", file=out)
    if result.failures:
        print(f"  {len(result.failures)} monitor(s) skipped", file=out)
    
    snapshot = result.snapshot
    print(f"  Background Color: {snapshot.color_hex}", file=out)
    print(f"  Position: {snapshot.position.label}", file=out)
    print(f"  Saved at: {snapshot.saved_at:%Y-%m-%d %H:%M:%S}", file=out)
