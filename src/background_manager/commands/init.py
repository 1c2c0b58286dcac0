"""Initialization command."""

import sys
from pathlib import Path
from typing import Optional, TextIO

from ..config import Config


def init_config(config_file: Optional[Path] = None, out: TextIO = sys.stdout) -> Path:
    """
    Write a default config file. An existing file is left untouched.
    
    Returns:
        Path of the config file
    """
    config_file = config_file or Config.get_config_file()
    
    if config_file.exists():
        print(f"Config already exists at {config_file}", file=out)
        return config_file
    
    Config().save(config_file)
    print(f"Configuration initialized at {config_file}", file=out)
    return config_file
