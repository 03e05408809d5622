"""Custom exceptions for Shiftline."""


class ShiftlineError(Exception):
    """Base exception for all Shiftline errors."""

    pass


class ValidationError(ShiftlineError):
    """Raised when schedule data fails validation."""

    pass


class ParseError(ShiftlineError):
    """Raised when YAML parsing fails."""

    pass


class ConfigError(ShiftlineError):
    """Raised when a configuration file is invalid."""

    pass
