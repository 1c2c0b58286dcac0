"""
Common exception classes for Background Manager.

Provides domain-specific exceptions for consistent error handling across modules.
All exceptions inherit from BackgroundManagerError for unified catching at CLI level.
"""


class BackgroundManagerError(Exception):
    """
    Base exception for all Background Manager errors.
    
    All domain-specific exceptions inherit from this class, allowing
    callers to catch all Background Manager errors with a single except clause.
    """
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigError(BackgroundManagerError):
    """
    Configuration-related errors.
    
    Raised when:
    - Config file is malformed or unreadable
    - Config contains unknown sections or keys
    """
    pass


class ConfigValidationError(ConfigError):
    """
    Config value validation failed.
    
    Raised when a config value is present but invalid (e.g., color out of
    range, non-positive placeholder size, unknown log level).
    """
    pass


# ============================================================================
# Monitor Service Errors
# ============================================================================

class AdapterError(BackgroundManagerError):
    """
    OS wallpaper service call failed.
    
    Raised when:
    - A monitor id or index is unknown to the service
    - The service rejects a wallpaper path
    - The service returns a malformed response
    """
    pass


class ServiceUnavailableError(AdapterError):
    """
    The OS wallpaper service could not be reached.
    
    Raised when the service handle cannot be created, for example on an
    unsupported platform or when COM initialization fails.
    """
    pass


# ============================================================================
# Settings File Errors
# ============================================================================

class SettingsFileError(BackgroundManagerError):
    """
    Settings backup file errors.
    
    Base class for errors reading or writing the backup file.
    """
    pass


class PersistenceError(SettingsFileError):
    """
    Backup file could not be read or written.
    
    Raised on permission problems, a full disk, or a missing parent
    directory that cannot be created.
    """
    pass


class FormatError(SettingsFileError):
    """
    Backup file exists but its content is not a valid snapshot.
    
    Raised for invalid JSON, missing fields, wrong field types,
    unknown position names and unparsable timestamps.
    """
    pass


class NotFoundError(SettingsFileError):
    """
    No backup file is present.
    
    This is an expected condition (nothing has been saved yet), reported
    to the user as guidance rather than as a failure.
    """
    pass
