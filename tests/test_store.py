"""Tests for the settings backup store."""

import json
import os
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from background_manager.exceptions import FormatError, PersistenceError
from background_manager.monitor_service import WallpaperPosition
from background_manager.snapshot import MonitorRecord, SettingsSnapshot
from background_manager.store import BACKUP_FILENAME, SettingsStore, default_backup_path


@pytest.fixture
def snapshot() -> SettingsSnapshot:
    return SettingsSnapshot(
        background_color=0x00FFFFFF,
        position=WallpaperPosition.FILL,
        monitors=(
            MonitorRecord(0, "MON-0", "C:\\wp\\a.jpg", 0, 0, 1920, 1080, True),
            MonitorRecord(1, "MON-1", "", 1920, 0, 1280, 1024, False),
        ),
        saved_at=datetime(2025, 3, 14, 9, 26, 53, 589793),
    )


def test_default_path_is_in_home_directory():
    assert default_backup_path() == Path.home() / BACKUP_FILENAME
    assert SettingsStore().path == Path.home() / "desktop_background_backup.json"


def test_round_trip(store, snapshot):
    """A saved snapshot loads back equal field-for-field."""
    store.save(snapshot)
    
    assert store.load() == snapshot


def test_load_absent_returns_none(store):
    assert not store.exists()
    assert store.load() is None


def test_load_invalid_json_raises_format_error(store, backup_path):
    backup_path.write_text("{ invalid json content")
    
    with pytest.raises(FormatError, match="not valid JSON"):
        store.load()


def test_load_wrong_shape_raises_format_error(store, backup_path):
    backup_path.write_text(json.dumps({"backgroundColor": 0}))
    
    with pytest.raises(FormatError, match="malformed"):
        store.load()


def test_file_format(store, backup_path, snapshot):
    store.save(snapshot)
    
    data = json.loads(backup_path.read_text(encoding="utf-8"))
    
    assert set(data) == {"backgroundColor", "position", "monitors", "savedAt"}
    assert data["position"] == "Fill"
    assert data["monitors"][1]["wallpaperPath"] == ""
    assert data["monitors"][0]["isPrimary"] is True


def test_save_overwrites_previous_backup(store, snapshot):
    store.save(snapshot)
    newer = SettingsSnapshot(0x000000, WallpaperPosition.CENTER, saved_at=datetime(2025, 4, 1))
    
    store.save(newer)
    
    assert store.load() == newer


def test_save_creates_parent_directory(temp_dir, snapshot):
    store = SettingsStore(temp_dir / "nested" / "dir" / "backup.json")
    
    store.save(snapshot)
    
    assert store.exists()


def test_save_leaves_no_temporary_files(store, backup_path, snapshot):
    store.save(snapshot)
    
    assert [p.name for p in backup_path.parent.iterdir()] == [backup_path.name]


def test_failed_save_keeps_previous_backup(store, backup_path, snapshot):
    """A write failure must not truncate or replace the existing file."""
    store.save(snapshot)
    original = backup_path.read_text(encoding="utf-8")
    
    newer = SettingsSnapshot(0x000000, WallpaperPosition.CENTER)
    with patch("background_manager.store.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(PersistenceError, match="disk full"):
            store.save(newer)
    
    assert backup_path.read_text(encoding="utf-8") == original
    assert [p.name for p in backup_path.parent.iterdir()] == [backup_path.name]


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="POSIX permissions, non-root only")
def test_save_to_read_only_directory_raises_persistence_error(temp_dir, snapshot):
    read_only = temp_dir / "ro"
    read_only.mkdir()
    read_only.chmod(0o500)
    try:
        with pytest.raises(PersistenceError):
            SettingsStore(read_only / "backup.json").save(snapshot)
    finally:
        read_only.chmod(0o700)


def test_load_accepts_utf8_bom(store, backup_path, snapshot):
    backup_path.write_text("\ufeff" + json.dumps(snapshot.to_dict()), encoding="utf-8")
    
    assert store.load() == snapshot
