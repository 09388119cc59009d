"""Settings store: save-if-changed and load-if-new for per-track equalizer state."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Final

from trackeq.common.enums import LoadOutcome, Profile
from trackeq.host.protocols import HostPlayer
from trackeq.store.errors import (
    FileOpenError,
    MalformedRecordError,
    MissingRecordError,
    NoActiveTrackError,
)
from trackeq.store.records import EqRecord
from trackeq.store.repository import RecordRepository
from trackeq.utils.file import ensure_directory_exists

logger: Final = logging.getLogger(__name__)


def _comparable(preamp: str | float) -> str | float:
    # Host may hand back 2.0 where the file said "2.0"; compare numerically.
    # NaN never equals itself, so non-finite values compare as text.
    try:
        value = float(preamp)
    except (TypeError, ValueError, OverflowError):
        return str(preamp)
    return value if math.isfinite(value) else str(preamp)


class SettingsStore:
    """Maps (profile, track) pairs to persisted equalizer records.

    The store owns the only mutable state of the extension:

    - the identifier of the last track a load was attempted for
    - the last observed equalizer state (bands and preamp)

    Both live in memory only and are reset on activate/deactivate. The host
    calls the ``EventSink`` methods serially from a single thread, so no
    locking is done.

    Examples:
        host = MockHost("file:///a.mp3", "1 2 3", 2.0)
        store = SettingsStore(host, RecordRepository(Path("/tmp/eq")))
        store.on_activate()
        store.on_track_changed()
    """

    def __init__(
        self,
        host: HostPlayer,
        repository: RecordRepository,
        profile: Profile = Profile.HEADPHONES,
    ) -> None:
        """Initialize the store.

        Args:
            host: Player whose equalizer is read and written
            repository: File storage for records
            profile: Namespace used for saves and loads
        """
        self.host = host
        self.repository = repository
        self.profile = profile
        self._last_track_id: str | None = None
        self._last_bands: str | None = None
        self._last_preamp: str | float | None = None

    @property
    def directory(self) -> Path:
        return self.repository.directory

    @property
    def last_track_id(self) -> str | None:
        """Identifier of the last track a load was attempted for."""
        return self._last_track_id

    def reset(self) -> None:
        """Forget the last loaded track and the last observed state."""
        self._last_track_id = None
        self._last_bands = None
        self._last_preamp = None

    # ---- core operations ----
    def save_if_changed(
        self, profile: Profile, track_id: str, bands: str, preamp: str | float
    ) -> bool:
        """Persist the equalizer state if it differs from the last one seen.

        The comparison is against memory, never against the file on disk.
        A failed write is logged and dropped; the state still counts as seen
        so it is not retried on the next notification.

        Args:
            profile: Namespace to save under
            track_id: Identifier of the active track
            bands: Current band levels from the host
            preamp: Current preamp gain from the host

        Returns:
            True if a record was written
        """
        if (
            self._last_bands == bands
            and self._last_preamp is not None
            and _comparable(self._last_preamp) == _comparable(preamp)
        ):
            return False

        self._last_bands = bands
        self._last_preamp = preamp

        try:
            record = EqRecord.from_state(bands, preamp)
            path = self.repository.write(profile, track_id, record)
        except FileOpenError as exc:
            logger.error("%s", exc.message)
            return False
        except MalformedRecordError as exc:
            logger.error("Not saving EQ settings for %s: %s", track_id, exc.message)
            return False

        logger.info("EQ settings saved to %s", path)
        return True

    def load_if_new(self, profile: Profile, track_id: str) -> LoadOutcome:
        """Apply the stored record for a track unless it was just loaded.

        Args:
            profile: Namespace to load from
            track_id: Identifier of the newly active track

        Returns:
            What happened; the host equalizer is only touched on APPLIED
        """
        if track_id == self._last_track_id:
            return LoadOutcome.SKIPPED
        self._last_track_id = track_id

        try:
            record = self.repository.read(profile, track_id)
        except MissingRecordError as exc:
            logger.info("%s", exc.message)
            return LoadOutcome.NOT_FOUND
        except MalformedRecordError as exc:
            logger.error(
                "Error reading EQ settings from file: %s (%s)",
                self.repository.path_for(profile, track_id),
                exc.message,
            )
            return LoadOutcome.MALFORMED
        except FileOpenError as exc:
            logger.error("%s", exc.message)
            return LoadOutcome.UNREADABLE

        self._apply(record)
        logger.info(
            "EQ settings loaded from %s",
            self.repository.path_for(profile, track_id),
        )
        return LoadOutcome.APPLIED

    def switch_profile(self, profile: Profile) -> LoadOutcome:
        """Change namespace and reload the current track under it.

        Stored records are left untouched.
        """
        logger.info("Switching EQ profile to %s", profile.label)
        self.profile = profile
        self._last_track_id = None
        try:
            track_id = self._active_track_id()
        except NoActiveTrackError as exc:
            logger.error("%s", exc.message)
            return LoadOutcome.NO_TRACK
        return self.load_if_new(profile, track_id)

    def sync(self) -> LoadOutcome:
        """Save the current state if changed, then load for the active track."""
        try:
            track_id = self._active_track_id()
        except NoActiveTrackError as exc:
            logger.error("%s", exc.message)
            return LoadOutcome.NO_TRACK

        self.save_if_changed(
            self.profile,
            track_id,
            self.host.get_equalizer_bands(),
            self.host.get_equalizer_preamp(),
        )
        return self.load_if_new(self.profile, track_id)

    # ---- EventSink ----
    def on_activate(self) -> None:
        self.reset()
        ensure_directory_exists(self.directory)
        try:
            track_id = self._active_track_id()
        except NoActiveTrackError as exc:
            logger.error("%s", exc.message)
            return
        self.load_if_new(self.profile, track_id)

    def on_deactivate(self) -> None:
        self.reset()

    def on_track_changed(self) -> None:
        self.sync()

    def on_metadata_changed(self) -> None:
        self.sync()

    # ---- helpers ----
    def _active_track_id(self) -> str:
        track_id = self.host.get_active_track_identifier()
        if not track_id:
            raise NoActiveTrackError()
        return track_id

    def _apply(self, record: EqRecord) -> None:
        self.host.set_equalizer_bands(record.bands)
        self.host.set_equalizer_preamp(record.preamp_value)
        self.host.notify_ui_refresh()
        # Loaded state is now the observed state; don't write it straight back.
        self._last_bands = record.bands
        self._last_preamp = record.preamp
