"""
Configuration validation for Background Manager.
"""

from pathlib import Path
from typing import Any, Dict

from ..exceptions import ConfigError


VALID_STRUCTURE: Dict[str, Dict[str, type]] = {
    'backup': {
        'path': str,
    },
    'fallback': {
        'color': int,
        'width': int,
        'height': int,
    },
    'logging': {
        'level': str,
    },
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def validate_toml_structure(config_dict: Dict[str, Any], config_file: Path) -> None:
    """
    Validate TOML structure before creating dataclasses.
    
    Checks for unknown sections and keys and for mistyped values,
    providing helpful error messages.
    
    Args:
        config_dict: Loaded TOML configuration dictionary
        config_file: Path to config file for error messages
        
    Raises:
        ConfigError: If structure validation fails
    """
    for section, values in config_dict.items():
        if section not in VALID_STRUCTURE:
            raise ConfigError(
                f"Unknown section [{section}] in {config_file}\n"
                f"Valid sections: {', '.join(VALID_STRUCTURE)}"
            )
        
        if not isinstance(values, dict):
            raise ConfigError(f"'{section}' in {config_file} must be a table, e.g. [{section}]")
        
        valid_keys = VALID_STRUCTURE[section]
        for key, value in values.items():
            if key not in valid_keys:
                raise ConfigError(
                    f"Unknown key '{key}' in [{section}] of {config_file}\n"
                    f"Valid keys: {', '.join(valid_keys)}"
                )
            
            expected = valid_keys[key]
            if isinstance(value, bool) or not isinstance(value, expected):
                raise ConfigError(
                    f"Invalid type for {section}.{key} in {config_file}: "
                    f"expected {expected.__name__}, got {type(value).__name__}"
                )
