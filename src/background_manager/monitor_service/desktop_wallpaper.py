"""
Windows IDesktopWallpaper adapter.

Talks to the shell's DesktopWallpaper COM object through comtypes. Only
importable on Windows; use open_monitor_service() instead of importing this
module directly.
"""

import ctypes
from ctypes import POINTER, c_int, c_uint, c_void_p, c_wchar_p, wintypes
from typing import Optional

try:
    import comtypes
    import comtypes.client
    from comtypes import COMError, COMMETHOD, GUID, HRESULT, IUnknown
except ImportError:
    raise ImportError("Required package 'comtypes' not found. Install with: pip install comtypes")

from ..exceptions import AdapterError, ServiceUnavailableError
from .base import Bounds, MonitorService, WallpaperPosition


CLSID_DesktopWallpaper = GUID("{C2CF3110-460E-4FC1-B9D0-8A1C0C9CC4BD}")

_CoTaskMemFree = ctypes.windll.ole32.CoTaskMemFree
_CoTaskMemFree.argtypes = [c_void_p]
_CoTaskMemFree.restype = None


def _take_string(address: Optional[int]) -> str:
    """Copy a COM-allocated wide string and free its buffer."""
    if not address:
        return ""
    try:
        return ctypes.wstring_at(address)
    finally:
        _CoTaskMemFree(address)


class RECT(ctypes.Structure):
    _fields_ = [
        ("left", wintypes.LONG),
        ("top", wintypes.LONG),
        ("right", wintypes.LONG),
        ("bottom", wintypes.LONG),
    ]


class IDesktopWallpaper(IUnknown):
    # Vtable order matters; slideshow methods after GetPosition are not declared.
    _iid_ = GUID("{B92B56A9-8B55-4E14-9A89-0199BBB6F93B}")
    _methods_ = [
        COMMETHOD([], HRESULT, 'SetWallpaper',
                  (['in'], c_wchar_p, 'monitorID'),
                  (['in'], c_wchar_p, 'wallpaper')),
        COMMETHOD([], HRESULT, 'GetWallpaper',
                  (['in'], c_wchar_p, 'monitorID'),
                  (['out', 'retval'], POINTER(c_void_p), 'wallpaper')),
        COMMETHOD([], HRESULT, 'GetMonitorDevicePathAt',
                  (['in'], c_uint, 'monitorIndex'),
                  (['out', 'retval'], POINTER(c_void_p), 'monitorID')),
        COMMETHOD([], HRESULT, 'GetMonitorDevicePathCount',
                  (['out', 'retval'], POINTER(c_uint), 'count')),
        COMMETHOD([], HRESULT, 'GetMonitorRECT',
                  (['in'], c_wchar_p, 'monitorID'),
                  (['out', 'retval'], POINTER(RECT), 'displayRect')),
        COMMETHOD([], HRESULT, 'SetBackgroundColor',
                  (['in'], wintypes.DWORD, 'color')),
        COMMETHOD([], HRESULT, 'GetBackgroundColor',
                  (['out', 'retval'], POINTER(wintypes.DWORD), 'color')),
        COMMETHOD([], HRESULT, 'SetPosition',
                  (['in'], c_int, 'position')),
        COMMETHOD([], HRESULT, 'GetPosition',
                  (['out', 'retval'], POINTER(c_int), 'position')),
    ]


class DesktopWallpaperService(MonitorService):
    """MonitorService backed by the Windows DesktopWallpaper COM object."""
    
    def __init__(self) -> None:
        super().__init__()
        self._wallpaper: Optional[IDesktopWallpaper] = None
        
        try:
            comtypes.CoInitialize()
        except (COMError, OSError) as e:
            raise ServiceUnavailableError(f"Failed to initialize COM: {e}") from e
        
        try:
            self._wallpaper = comtypes.client.CreateObject(
                CLSID_DesktopWallpaper, interface=IDesktopWallpaper
            )
        except (COMError, OSError) as e:
            comtypes.CoUninitialize()
            raise ServiceUnavailableError(
                f"Could not create DesktopWallpaper COM object: {e}\n"
                "Per-monitor wallpaper control requires Windows 8 or later."
            ) from e
        
        self.logger.debug("Acquired IDesktopWallpaper handle")
    
    def _call(self, description: str, method: str, *args):
        """Invoke a COM method, translating failures into AdapterError."""
        if self._wallpaper is None:
            raise AdapterError(f"Cannot {description}: monitor service is closed")
        try:
            return getattr(self._wallpaper, method)(*args)
        except (COMError, OSError, ValueError) as e:
            raise AdapterError(f"Failed to {description}: {e}") from e
    
    def monitor_count(self) -> int:
        return int(self._call("count monitors", "GetMonitorDevicePathCount"))
    
    def monitor_id_at(self, index: int) -> str:
        count = self.monitor_count()
        if index < 0 or index >= count:
            raise AdapterError(f"Monitor index {index} out of range (0..{count - 1})")
        monitor_id = _take_string(self._call(
            f"get id of monitor {index}", "GetMonitorDevicePathAt", index
        ))
        if not monitor_id:
            raise AdapterError(f"Service returned an empty id for monitor {index}")
        return monitor_id
    
    def get_wallpaper(self, monitor_id: str) -> str:
        return _take_string(self._call(
            f"get wallpaper for {monitor_id}", "GetWallpaper", monitor_id
        ))
    
    def get_monitor_bounds(self, monitor_id: str) -> Bounds:
        rect = self._call(
            f"get bounds for {monitor_id}", "GetMonitorRECT", monitor_id
        )
        return Bounds.from_rect(rect.left, rect.top, rect.right, rect.bottom)
    
    def get_background_color(self) -> int:
        color = self._call("get background color", "GetBackgroundColor")
        return int(color) & 0xFFFFFF
    
    def set_background_color(self, color: int) -> None:
        self._call("set background color", "SetBackgroundColor", color & 0xFFFFFF)
    
    def get_position(self) -> WallpaperPosition:
        value = self._call("get wallpaper position", "GetPosition")
        try:
            return WallpaperPosition(int(value))
        except ValueError as e:
            raise AdapterError(f"Service reported unknown wallpaper position {value}") from e
    
    def set_position(self, position: WallpaperPosition) -> None:
        self._call(
            f"set wallpaper position to {position.label}",
            "SetPosition",
            int(position),
        )
    
    def set_wallpaper(self, monitor_id: str, path: str) -> None:
        self._call(
            f"set wallpaper on {monitor_id}", "SetWallpaper", monitor_id, path
        )
    
    def _release(self) -> None:
        # Dropping the last reference releases the COM pointer.
        self._wallpaper = None
        comtypes.CoUninitialize()
