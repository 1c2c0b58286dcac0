"""Tests for the monitor service abstraction and display topology."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
from screeninfo.common import ScreenInfoError

from background_manager.exceptions import AdapterError, ServiceUnavailableError
from background_manager.monitor_service import (
    Bounds,
    DisplayTopology,
    Screen,
    WallpaperPosition,
    open_monitor_service,
)


class TestWallpaperPosition:
    
    def test_values_match_service_enum(self):
        assert [int(p) for p in WallpaperPosition] == [0, 1, 2, 3, 4, 5]
    
    def test_labels(self):
        assert [p.label for p in WallpaperPosition] == ["Center", "Tile", "Stretch", "Fit", "Fill", "Span"]
    
    @pytest.mark.parametrize("label", ["Fill", "fill", " FILL "])
    def test_from_label(self, label):
        assert WallpaperPosition.from_label(label) is WallpaperPosition.FILL
    
    def test_from_unknown_label(self):
        with pytest.raises(ValueError, match="Unknown wallpaper position"):
            WallpaperPosition.from_label("Zoom")


class TestBounds:
    
    def test_from_rect(self):
        assert Bounds.from_rect(1920, 0, 3200, 1024) == Bounds(1920, 0, 1280, 1024)
    
    def test_from_rect_negative_origin(self):
        assert Bounds.from_rect(-1280, -200, 0, 824) == Bounds(-1280, -200, 1280, 1024)
    
    def test_inverted_rect_clamped(self):
        bounds = Bounds.from_rect(100, 100, 50, 50)
        
        assert (bounds.width, bounds.height) == (0, 0)


class TestServiceLifecycle:
    
    def test_context_manager_releases_once(self, two_monitor_service):
        with two_monitor_service as service:
            assert not service.closed
        
        assert two_monitor_service.closed
        assert two_monitor_service.release_count == 1
        
        two_monitor_service.close()
        assert two_monitor_service.release_count == 1
    
    def test_released_when_block_raises(self, two_monitor_service):
        with pytest.raises(RuntimeError):
            with two_monitor_service:
                raise RuntimeError("boom")
        
        assert two_monitor_service.release_count == 1
    
    def test_closed_service_rejects_calls(self, two_monitor_service):
        with two_monitor_service:
            pass
        
        with pytest.raises(AdapterError, match="after close"):
            two_monitor_service.monitor_count()
    
    def test_unsupported_platform(self):
        with patch("background_manager.monitor_service.sys.platform", "linux"):
            with pytest.raises(ServiceUnavailableError, match="not supported on linux"):
                open_monitor_service()


class TestDisplayTopology:
    
    def test_screens_from_screeninfo(self):
        monitors = [
            SimpleNamespace(x=0, y=0, width=2560, height=1440, is_primary=True, name="DISPLAY1"),
            SimpleNamespace(x=2560, y=0, width=1920, height=1080, is_primary=None, name="DISPLAY2"),
        ]
        with patch("background_manager.monitor_service.topology.screeninfo.get_monitors", return_value=monitors):
            screens = DisplayTopology().screens()
        
        assert screens == [
            Screen(0, 0, 2560, 1440, is_primary=True, name="DISPLAY1"),
            Screen(2560, 0, 1920, 1080, is_primary=False, name="DISPLAY2"),
        ]
        assert screens[1].bounds == Bounds(2560, 0, 1920, 1080)
    
    def test_unavailable_topology_returns_empty(self, caplog):
        error = ScreenInfoError("No enumerators available")
        with patch("background_manager.monitor_service.topology.screeninfo.get_monitors", side_effect=error):
            assert DisplayTopology().screens() == []
        
        assert "Display topology unavailable" in caplog.text
