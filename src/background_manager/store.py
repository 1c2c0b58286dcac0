"""
Persistence of the wallpaper settings snapshot.

One JSON document at a fixed path; every save overwrites it. Writes go
through a temporary file in the same directory and os.replace(), so a
failed save never leaves a truncated backup behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .exceptions import FormatError, PersistenceError
from .snapshot import SettingsSnapshot

BACKUP_FILENAME = "desktop_background_backup.json"


def default_backup_path() -> Path:
    """Default backup file location in the user's home directory."""
    return Path.home() / BACKUP_FILENAME


class SettingsStore:
    """Reads and writes the SettingsSnapshot backup file."""
    
    def __init__(self, path: Optional[Path] = None) -> None:
        """
        Initialize the store.
        
        Args:
            path: Backup file path (defaults to ~/desktop_background_backup.json)
        """
        self.path = Path(path).expanduser() if path else default_backup_path()
        self.logger = logging.getLogger(__name__)
    
    def exists(self) -> bool:
        return self.path.is_file()
    
    def load(self) -> Optional[SettingsSnapshot]:
        """
        Load the saved snapshot.
        
        Returns:
            SettingsSnapshot, or None if no backup file exists
            
        Raises:
            FormatError: If the file exists but is not a valid snapshot
            PersistenceError: If the file exists but cannot be read
        """
        if not self.path.exists():
            self.logger.debug(f"No backup file at {self.path}")
            return None
        
        try:
            with open(self.path, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise FormatError(f"Backup file {self.path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise FormatError(f"Backup file {self.path} is not valid UTF-8 text: {e}") from e
        except OSError as e:
            raise PersistenceError(f"Failed to read backup file {self.path}: {e}") from e
        
        try:
            snapshot = SettingsSnapshot.from_dict(data)
        except FormatError as e:
            raise FormatError(f"Backup file {self.path} is malformed: {e}") from e
        
        self.logger.info(f"Loaded settings for {len(snapshot.monitors)} monitors from {self.path}")
        return snapshot
    
    def save(self, snapshot: SettingsSnapshot) -> Path:
        """
        Write the snapshot, replacing any previous backup.
        
        Args:
            snapshot: Snapshot to persist
            
        Returns:
            Path the snapshot was written to
            
        Raises:
            PersistenceError: If the file cannot be written
        """
        try:
            content = json.dumps(snapshot.to_dict(), indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to serialize settings: {e}") from e
        
        tmp_path: Optional[Path] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(content)
                tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise PersistenceError(f"Failed to save settings to {self.path}: {e}") from e
        finally:
            if tmp_path is not None:
                try:
                    tmp_path.unlink()
                except FileNotFoundError:
                    pass
        
        self.logger.info(f"Saved settings for {len(snapshot.monitors)} monitors to {self.path}")
        return self.path
