"""
Main Config class for Background Manager.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomli
except ImportError:
    raise ImportError("Required package 'tomli' not found. Install with: pip install tomli")

try:
    import tomli_w
except ImportError:
    raise ImportError("Required package 'tomli_w' not found. Install with: pip install tomli-w")

from ..exceptions import ConfigError, ConfigValidationError
from .dataclasses import BackupConfig, FallbackConfig, LoggingConfig
from .validation import VALID_LOG_LEVELS, validate_toml_structure

ENV_BACKUP_FILE = "BACKGROUND_MANAGER_BACKUP_FILE"
ENV_LOG_LEVEL = "BACKGROUND_MANAGER_LOG_LEVEL"


@dataclass
class Config:
    """
    Main configuration class for Background Manager.
    
    Configuration is loaded from TOML files with environment variable overrides.
    Every setting has a default, so a missing config file is not an error.
    """
    
    backup: BackupConfig = field(default_factory=BackupConfig)
    fallback: FallbackConfig = field(default_factory=FallbackConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    
    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0 <= self.fallback.color <= 0xFFFFFF:
            raise ConfigValidationError(
                f"Fallback color ({self.fallback.color:#x}) out of range.\n"
                "Must be a 24-bit value between 0x000000 and 0xFFFFFF."
            )
        
        if self.fallback.width <= 0 or self.fallback.height <= 0:
            raise ConfigValidationError(
                f"Fallback size ({self.fallback.width}x{self.fallback.height}) must be positive."
            )
        
        if self.logging.level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"Invalid log level: {self.logging.level}\n"
                f"Must be one of: {VALID_LOG_LEVELS}"
            )
    
    def get_backup_path(self) -> Optional[Path]:
        """Configured backup file path, or None for the default location."""
        return self.backup.get_path()
    
    @classmethod
    def get_config_dir(cls) -> Path:
        """
        Get user configuration directory.
        
        Uses XDG_CONFIG_HOME if set, otherwise defaults to ~/.config.
        """
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "background-manager"
        return Path.home() / ".config" / "background-manager"
    
    @classmethod
    def get_config_file(cls) -> Path:
        """Get default config file path."""
        return cls.get_config_dir() / "config.toml"
    
    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> 'Config':
        """
        Load configuration from TOML file with environment overrides.
        
        Args:
            config_file: Optional path to config TOML file
            
        Returns:
            Config instance with loaded settings
            
        Raises:
            ConfigError: If the file cannot be read or has an invalid structure
            ConfigValidationError: If a value is out of range
        """
        logger = logging.getLogger(__name__)
        
        if not config_file:
            config_file = cls.get_config_file()
        
        config_dict: Dict[str, Any] = {}
        if config_file.exists():
            try:
                with open(config_file, 'rb') as f:
                    config_dict = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e
            except OSError as e:
                raise ConfigError(f"Failed to read config file {config_file}: {e}") from e
            
            validate_toml_structure(config_dict, config_file)
            logger.debug(f"Loaded config from {config_file}")
        else:
            logger.debug(f"No config file at {config_file}, using defaults")
        
        backup_dict = dict(config_dict.get('backup', {}))
        logging_dict = dict(config_dict.get('logging', {}))
        
        env_backup = os.environ.get(ENV_BACKUP_FILE)
        if env_backup:
            logger.debug(f"Backup path overridden by {ENV_BACKUP_FILE}")
            backup_dict['path'] = env_backup
        
        env_level = os.environ.get(ENV_LOG_LEVEL)
        if env_level:
            logging_dict['level'] = env_level
        
        return cls(
            backup=BackupConfig(**backup_dict),
            fallback=FallbackConfig(**config_dict.get('fallback', {})),
            logging=LoggingConfig(**logging_dict),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a TOML-serializable dict."""
        config_dict: Dict[str, Any] = {
            'fallback': {
                'color': self.fallback.color,
                'width': self.fallback.width,
                'height': self.fallback.height,
            },
            'logging': {
                'level': self.logging.level,
            },
        }
        
        if self.backup.path:
            config_dict['backup'] = {'path': self.backup.path}
        
        return config_dict
    
    def save(self, config_file: Optional[Path] = None) -> Path:
        """
        Write configuration to a TOML file.
        
        Args:
            config_file: Target path (defaults to the user config file)
            
        Returns:
            Path written
            
        Raises:
            ConfigError: If the file cannot be written
        """
        config_file = config_file or self.get_config_file()
        
        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, 'wb') as f:
                tomli_w.dump(self.to_dict(), f)
        except OSError as e:
            raise ConfigError(f"Failed to save config to {config_file}: {e}") from e
        
        logging.getLogger(__name__).info(f"Saved config to {config_file}")
        return config_file
