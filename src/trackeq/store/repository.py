"""File-backed storage of equalizer records."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Final

from trackeq.common.enums import KeyScheme, Profile
from trackeq.constants import LEGACY_PREAMP, RECORD_ENCODING, RECORD_SUFFIX
from trackeq.store.errors import FileOpenError, MissingRecordError
from trackeq.store.keys import legacy_path, settings_path
from trackeq.store.records import EqRecord

logger: Final = logging.getLogger(__name__)


class RecordRepository:
    """Reads and writes one text file per (profile, track) pair.

    Writes overwrite the file in place; there is no temp file and rename,
    so an interrupted write can leave a truncated record behind.
    """

    def __init__(
        self,
        directory: Path,
        key_scheme: KeyScheme = KeyScheme.SANITIZED,
        legacy_fallback: bool = True,
        legacy_preamp: float = LEGACY_PREAMP,
    ) -> None:
        """Initialize the repository.

        Args:
            directory: Directory holding the settings files
            key_scheme: How track identifiers become filenames
            legacy_fallback: Read bands-only files when no profile record exists
            legacy_preamp: Preamp applied with legacy records
        """
        self.directory = directory
        self.key_scheme = key_scheme
        self.legacy_fallback = legacy_fallback
        self.legacy_preamp = legacy_preamp

    def path_for(self, profile: Profile, track_id: str) -> Path:
        """Settings file path for a (profile, track) pair."""
        return settings_path(self.directory, profile, track_id, self.key_scheme)

    def write(self, profile: Profile, track_id: str, record: EqRecord) -> Path:
        """Overwrite the settings file for a (profile, track) pair.

        Raises:
            FileOpenError: If the file cannot be opened or written
        """
        path = self.path_for(profile, track_id)
        try:
            with path.open("w", encoding=RECORD_ENCODING) as fh:
                fh.write(record.to_text())
        except OSError as exc:
            raise FileOpenError(
                f"Error opening file for writing: {path} - {exc}", path, exc
            ) from exc
        return path

    def read(self, profile: Profile, track_id: str) -> EqRecord:
        """Read the record for a (profile, track) pair.

        Falls back to the legacy bands-only file when enabled.

        Raises:
            MissingRecordError: If no settings file exists
            MalformedRecordError: If the file lacks bands or preamp
            FileOpenError: If the file exists but cannot be read
        """
        path = self.path_for(profile, track_id)
        if path.is_file():
            return EqRecord.parse(self._read_text(path))

        if self.legacy_fallback:
            old = legacy_path(self.directory, track_id)
            if old.is_file():
                logger.debug("Using legacy settings file %s", old)
                return EqRecord.parse_legacy(self._read_text(old), self.legacy_preamp)

        raise MissingRecordError(f"No EQ settings file found for {track_id}", path)

    def iter_paths(self, profile: Profile | None = None) -> Iterator[Path]:
        """Yield stored settings files, optionally limited to one profile."""
        if not self.directory.is_dir():
            return
        pattern = f"{profile.value}_*{RECORD_SUFFIX}" if profile else f"*{RECORD_SUFFIX}"
        yield from sorted(self.directory.glob(pattern))

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            return path.read_text(encoding=RECORD_ENCODING)
        except (OSError, UnicodeDecodeError) as exc:
            raise FileOpenError(f"Error reading EQ settings from file: {path}", path, exc) from exc
