"""CLI commands module."""

from .backup import save_settings, set_solid_white, restore_settings
from .status import show_status, get_status_json
from .init import init_config

__all__ = [
    "save_settings",
    "set_solid_white",
    "restore_settings",
    "show_status",
    "get_status_json",
    "init_config",
]
