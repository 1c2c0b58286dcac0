"""
Command-line interface for Background Manager.

Usage:
    background-manager [command] [options]

Commands:
    save          Save current background settings
    white         Set all monitors to solid white
    restore       Restore saved settings
    status, show  Show current settings
    init          Write a default config file
    help, ?       Show usage
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO

from .config import Config
from .exceptions import BackgroundManagerError, ConfigError, ServiceUnavailableError
from .manager import WallpaperManager
from .monitor_service import open_monitor_service
from .store import SettingsStore
from .commands import (
    save_settings,
    set_solid_white,
    restore_settings,
    show_status,
    init_config,
)

USAGE = """Usage:
  background-manager save      Save current background settings
  background-manager white     Set all monitors to solid white
  background-manager restore   Restore saved settings
  background-manager status    Show current settings
  background-manager init      Write a default config file
  background-manager help      Show this help

Options:
  -v, --verbose            Show detailed error information
  -c, --config PATH        Path to config file
  -f, --backup-file PATH   Backup file to save to / restore from
  --json                   Print status as JSON
"""

BANNER = "Desktop Background Manager (Multi-Monitor)"


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def print_usage(out: TextIO) -> None:
    print(USAGE, end="", file=out)


def normalize_command(command: str) -> str:
    """Lower-case a command and strip option-style prefixes ("--save", "/restore")."""
    return command.lower().lstrip("-/")


def _status(manager: WallpaperManager, out: TextIO, args: argparse.Namespace) -> None:
    show_status(manager, out, json_output=args.json)


COMMANDS: Dict[str, Callable[[WallpaperManager, TextIO, argparse.Namespace], None]] = {
    "save": lambda manager, out, args: save_settings(manager, out),
    "white": lambda manager, out, args: set_solid_white(manager, out),
    "restore": lambda manager, out, args: restore_settings(manager, out),
    "status": _status,
    "show": _status,
}

HELP_COMMANDS = ("help", "?", "h")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="background-manager",
        description="Back up and restore per-monitor desktop wallpaper settings",
        add_help=False,
    )
    parser.add_argument("command", nargs="?", help="save, white, restore, status, init or help")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed error information")
    parser.add_argument("-c", "--config", type=Path, help="Path to config file")
    parser.add_argument("-f", "--backup-file", type=Path, help="Backup file path")
    parser.add_argument("--json", action="store_true", help="Print status as JSON")
    return parser


def _run_with_manager(
    config: Config,
    args: argparse.Namespace,
    handler: Callable[[WallpaperManager, TextIO, argparse.Namespace], None],
    out: TextIO,
) -> None:
    """Acquire the wallpaper service, run one command, release the service."""
    store = SettingsStore(args.backup_file) if args.backup_file else None
    with open_monitor_service() as service:
        manager = WallpaperManager.from_config(service, config, store=store)
        handler(manager, out, args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    out = sys.stdout
    err = sys.stderr
    
    parser = build_parser()
    try:
        args, extras = parser.parse_known_args(argv)
    except SystemExit as e:
        # argparse has already printed the usage error
        return 1 if e.code else 0
    
    # "--save" style commands are not options argparse knows about
    command_arg = args.command
    if command_arg is None and extras:
        command_arg = extras[0]
    command = normalize_command(command_arg) if command_arg is not None else None
    
    if not args.json:
        print(BANNER, file=out)
        print("=" * 43, file=out)
        print(file=out)
    
    # Help and unknown commands never depend on config or the wallpaper service
    if command in HELP_COMMANDS:
        print_usage(out)
        return 0
    
    if command is not None and command != "init" and command not in COMMANDS:
        print(f"Unknown command: {command_arg}", file=err)
        print_usage(out)
        return 1
    
    logger = logging.getLogger(__name__)
    
    try:
        config = Config.load(config_file=args.config)
        
        level = "DEBUG" if args.verbose else config.logging.level
        setup_logging(level)
        
        if command is None:
            if not args.json:
                print_usage(out)
                print(file=out)
            _run_with_manager(config, args, _status, out)
            return 0
        
        if command == "init":
            init_config(args.config, out)
            return 0
        
        logger.debug(f"Running command: {command}")
        _run_with_manager(config, args, COMMANDS[command], out)
        return 0
    
    except KeyboardInterrupt:
        print("\nCancelled by user", file=err)
        return 130
    
    except ConfigError as e:
        print(f"Configuration Error: {e}", file=err)
        if args.verbose:
            print(file=err)
            print(traceback.format_exc(), end="", file=err)
        return 1
    
    except ServiceUnavailableError as e:
        print(f"Wallpaper Service Unavailable: {e}", file=err)
        if args.verbose:
            print(file=err)
            print(traceback.format_exc(), end="", file=err)
        return 1
    
    except BackgroundManagerError as e:
        print(f"Error: {e}", file=err)
        logger.debug(f"{type(e).__name__}: {e}")
        if args.verbose:
            print(file=err)
            print(traceback.format_exc(), end="", file=err)
        return 1
    
    except Exception as e:
        # Unexpected errors - show full traceback in verbose mode
        print(f"Unexpected Error: {type(e).__name__}: {e}", file=err)
        logger.error(f"Unexpected error: {type(e).__name__}: {e}")
        if args.verbose:
            print(file=err)
            print(traceback.format_exc(), end="", file=err)
        else:
            print("Run with -v/--verbose for full traceback.", file=err)
        return 1


if __name__ == "__main__":
    sys.exit(main())
