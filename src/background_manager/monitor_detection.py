"""
Monitor enumeration with fallbacks.

Builds one MonitorRecord per monitor the wallpaper service reports, even
when per-monitor wallpaper or bounds queries fail. Missing data is filled
from the display topology, then from placeholder bounds.
"""

import logging
from typing import List, Optional, Tuple

from .exceptions import AdapterError
from .monitor_service import Bounds, DisplayTopology, MonitorService, Screen
from .snapshot import MonitorRecord

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = Bounds(left=0, top=0, width=1920, height=1080)


class MonitorEnumerator:
    """
    Enumerate monitors through a MonitorService.
    
    Only a failure to identify a monitor is fatal. Wallpaper and bounds
    failures degrade to "no wallpaper" and fallback geometry.
    """
    
    def __init__(
        self,
        service: MonitorService,
        topology: Optional[DisplayTopology] = None,
        placeholder: Bounds = DEFAULT_PLACEHOLDER,
    ) -> None:
        self.service = service
        self.topology = topology or DisplayTopology()
        self.placeholder = placeholder
        self._screens: Optional[List[Screen]] = None
    
    def _get_screens(self) -> List[Screen]:
        """Topology screens, queried at most once per enumeration."""
        if self._screens is None:
            self._screens = self.topology.screens()
        return self._screens
    
    def enumerate(self) -> List[MonitorRecord]:
        """
        Enumerate all monitors in service order.
        
        Returns:
            One MonitorRecord per monitor, indices 0..N-1
            
        Raises:
            AdapterError: If the monitor count or a monitor id cannot be read
        """
        self._screens = None
        count = self.service.monitor_count()
        logger.debug(f"Wallpaper service reports {count} monitors")
        
        return [self._describe(index) for index in range(count)]
    
    def _describe(self, index: int) -> MonitorRecord:
        monitor_id = self.service.monitor_id_at(index)
        
        try:
            wallpaper_path = self.service.get_wallpaper(monitor_id)
        except AdapterError as e:
            # Monitors that never had a wallpaper set report an error here
            logger.debug(f"No wallpaper reported for monitor {index}: {e}")
            wallpaper_path = ""
        
        try:
            bounds = self.service.get_monitor_bounds(monitor_id)
        except AdapterError as e:
            logger.debug(f"Bounds query failed for monitor {index}: {e}")
            bounds, is_primary = self._fallback_geometry(index)
        else:
            is_primary = self._match_primary(index, bounds)
        
        return MonitorRecord(
            index=index,
            monitor_id=monitor_id,
            wallpaper_path=wallpaper_path,
            left=bounds.left,
            top=bounds.top,
            width=bounds.width,
            height=bounds.height,
            is_primary=is_primary,
        )
    
    def _match_primary(self, index: int, bounds: Bounds) -> bool:
        """Primary flag of the topology screen sharing this top-left corner."""
        for screen in self._get_screens():
            if screen.x == bounds.left and screen.y == bounds.top:
                return screen.is_primary
        # Approximation: first enumerated monitor is assumed primary
        return index == 0
    
    def _fallback_geometry(self, index: int) -> Tuple[Bounds, bool]:
        """Bounds and primary flag by position in the topology, else placeholder."""
        screens = self._get_screens()
        if index < len(screens):
            screen = screens[index]
            logger.info(f"Using display topology bounds for monitor {index}: {screen}")
            return screen.bounds, screen.is_primary
        
        logger.warning(
            f"Could not resolve bounds for monitor {index}; "
            f"using placeholder {self.placeholder.width}x{self.placeholder.height} "
            f"at ({self.placeholder.left},{self.placeholder.top})"
        )
        return self.placeholder, index == 0


def enumerate_monitors(
    service: MonitorService,
    topology: Optional[DisplayTopology] = None,
    placeholder: Bounds = DEFAULT_PLACEHOLDER,
) -> List[MonitorRecord]:
    """
    Convenience function to enumerate monitors.
    
    Args:
        service: Open monitor service
        topology: Display topology (defaults to screeninfo)
        placeholder: Bounds used when nothing else resolves
        
    Returns:
        List of MonitorRecord objects
    """
    return MonitorEnumerator(service, topology, placeholder).enumerate()
