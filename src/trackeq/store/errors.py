"""Exception classes for settings record storage.

All of these are recovered locally by the settings store: they are logged
and mapped to a ``LoadOutcome`` so nothing reaches the host player.
"""

from __future__ import annotations

from pathlib import Path


class SettingsStoreError(Exception):
    """Base error for settings record storage.

    Carries the settings file involved, when there is one.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            path: Settings file the error refers to
        """
        super().__init__(message)
        self.message: str = message
        self.path: Path | None = path


class FileOpenError(SettingsStoreError):
    """Raised when a settings file cannot be opened for reading or writing."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize with I/O error details.

        Args:
            message: Description of the failure
            path: Settings file that could not be opened
            original_error: The OSError that was caught
        """
        super().__init__(message, path)
        self.original_error = original_error


class MissingRecordError(SettingsStoreError):
    """Raised when no settings file exists for a track."""

    pass


class MalformedRecordError(SettingsStoreError):
    """Raised when a settings file lacks a required field or has bad values."""

    pass


class NoActiveTrackError(SettingsStoreError):
    """Raised when the host has no active track to key settings on."""

    def __init__(self, message: str = "No item found") -> None:
        super().__init__(message)
