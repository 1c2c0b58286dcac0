"""
Display topology from the desktop geometry API.

A secondary source of monitor geometry, independent of the wallpaper
service. Used to find the primary monitor and to fill in bounds the
wallpaper service cannot resolve.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import screeninfo
from screeninfo.common import ScreenInfoError

from .base import Bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Screen:
    """One display as reported by the desktop geometry API."""
    x: int
    y: int
    width: int
    height: int
    is_primary: bool = False
    name: Optional[str] = None
    
    @property
    def bounds(self) -> Bounds:
        return Bounds(left=self.x, top=self.y, width=self.width, height=self.height)
    
    def __repr__(self) -> str:
        return f"Screen({self.width}x{self.height}+{self.x}+{self.y}{' primary' if self.is_primary else ''})"


class DisplayTopology:
    """
    Enumerate screens through screeninfo.
    
    Failures are never fatal: an unavailable topology yields an empty list,
    and callers fall back to placeholders.
    """
    
    def screens(self) -> List[Screen]:
        """
        List screens in the order the desktop geometry API reports them.
        
        Returns:
            List of Screen objects (empty if the topology is unavailable)
        """
        try:
            monitors = screeninfo.get_monitors()
        except (ScreenInfoError, OSError, ValueError) as e:
            logger.warning(f"Display topology unavailable: {e}")
            return []
        
        screens = [
            Screen(
                x=m.x,
                y=m.y,
                width=m.width,
                height=m.height,
                is_primary=bool(m.is_primary),
                name=m.name,
            )
            for m in monitors
        ]
        logger.debug(f"Display topology reports {len(screens)} screens: {screens}")
        return screens
