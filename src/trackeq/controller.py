# filepath: src/trackeq/controller.py
"""Extension controller wiring the host player to the settings store."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Final

from typing_extensions import TypedDict

from trackeq.common.enums import LoadOutcome, Profile
from trackeq.constants import EXTENSION_CAPABILITIES, EXTENSION_TITLE, EXTENSION_VERSION
from trackeq.host.log_handler import HostLogHandler
from trackeq.host.profile_selector import ProfileSelector
from trackeq.host.protocols import HostPlayer
from trackeq.settings.application import ApplicationSettings
from trackeq.settings.user import UserSettings
from trackeq.store.settings_store import SettingsStore

logger: Final = logging.getLogger(__name__)

PACKAGE_LOGGER: Final = "trackeq"


class Descriptor(TypedDict):
    """Extension metadata reported to the host."""

    title: str
    version: str
    capabilities: list[str]


class EqualizerExtension:
    """Host-facing extension object.

    The host invokes the ``EventSink`` callbacks on this object. It owns the
    ``SettingsStore`` lifecycle: the store is built on activate and dropped on
    deactivate, and every callback is shielded so that no error reaches the
    host.
    """

    def __init__(
        self,
        host: HostPlayer,
        config_path: Path | None = None,
        settings: ApplicationSettings | None = None,
        debug: bool = False,
    ):
        """Initialize the extension.

        Args:
            host: Media player host
            config_path: Optional path to config.yaml
            settings: Pre-built settings (skips config loading)
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if debug else logging.INFO)

        self.host = host
        self.settings = settings or self._load_settings(config_path)
        self.profile: Profile = self.settings.default_profile
        self.store: SettingsStore | None = None
        self.selector = ProfileSelector(self.select_profile, self.profile)
        self._log_handler: HostLogHandler | None = None

    def _load_settings(self, config_path: Path | None) -> ApplicationSettings:
        """Load settings, falling back to defaults on a missing or bad config."""
        try:
            return ApplicationSettings.load(config_path)
        except (FileNotFoundError, RuntimeError) as exc:
            message = f"Using default settings: {exc}"
            logger.error("%s", message)
            self.host.log_error(message)
            return ApplicationSettings(UserSettings())

    @staticmethod
    def descriptor() -> Descriptor:
        return {
            "title": EXTENSION_TITLE,
            "version": EXTENSION_VERSION,
            "capabilities": list(EXTENSION_CAPABILITIES),
        }

    @property
    def active(self) -> bool:
        return self.store is not None

    # ---- EventSink ----
    def on_activate(self) -> None:
        """Build the store and load settings for the current track."""
        if self.store is None:
            self._attach_host_log()
            self.store = SettingsStore(
                self.host, self.settings.create_repository(), self.profile
            )
        self._dispatch(self.store.on_activate)

    def on_deactivate(self) -> None:
        """Tear the store down."""
        if self.store is None:
            return
        self._dispatch(self.store.on_deactivate)
        self.store = None
        self._detach_host_log()

    def on_track_changed(self) -> None:
        if self.store is not None:
            self._dispatch(self.store.on_track_changed)

    def on_metadata_changed(self) -> None:
        if self.store is not None:
            self._dispatch(self.store.on_metadata_changed)

    # ---- profile selection ----
    def select_profile(self, profile: Profile) -> LoadOutcome:
        """Switch profile and reload the current track under it.

        When inactive, only the profile used at the next activation changes.
        """
        self.profile = profile
        self.selector.active = profile
        if self.store is None:
            return LoadOutcome.SKIPPED
        try:
            return self.store.switch_profile(profile)
        except Exception as exc:
            logger.exception("Profile switch failed: %s", exc)
            return LoadOutcome.UNREADABLE

    # ---- helpers ----
    def _dispatch(self, callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception as exc:
            logger.exception("Unhandled error in %s: %s", callback.__name__, exc)

    def _attach_host_log(self) -> None:
        self._log_handler = HostLogHandler(self.host)
        logging.getLogger(PACKAGE_LOGGER).addHandler(self._log_handler)

    def _detach_host_log(self) -> None:
        if self._log_handler is not None:
            logging.getLogger(PACKAGE_LOGGER).removeHandler(self._log_handler)
            self._log_handler = None
