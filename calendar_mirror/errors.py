"""Error types raised by Calendar Mirror."""

from __future__ import annotations


class CalendarMirrorError(Exception):
    """Base class for all errors surfaced to the command line."""


class ConfigError(CalendarMirrorError):
    """Configuration or credentials file is missing, unreadable or invalid."""


class AuthError(CalendarMirrorError):
    """OAuth authorization or token refresh failed."""


class RemoteError(CalendarMirrorError):
    """A calendar API call failed."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class StateError(CalendarMirrorError):
    """The persisted sync state could not be written."""
