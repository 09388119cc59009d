"""Settings store package - records, file storage, errors and the store itself."""

from .errors import (
    FileOpenError,
    MalformedRecordError,
    MissingRecordError,
    NoActiveTrackError,
    SettingsStoreError,
)
from .keys import sanitize, settings_key, settings_path
from .records import EqRecord
from .repository import RecordRepository
from .settings_store import SettingsStore

__all__ = [
    "EqRecord",
    "FileOpenError",
    "MalformedRecordError",
    "MissingRecordError",
    "NoActiveTrackError",
    "RecordRepository",
    "SettingsStore",
    "SettingsStoreError",
    "sanitize",
    "settings_key",
    "settings_path",
]
