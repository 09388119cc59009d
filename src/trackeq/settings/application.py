"""Internal application settings derived from user settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from trackeq.common.enums import Profile
from trackeq.settings.user import UserSettings
from trackeq.store.repository import RecordRepository


@dataclass
class AppPaths:
    """Application file and directory paths."""

    eq_directory: Path

    @classmethod
    def from_user_settings(cls, user_settings: UserSettings) -> AppPaths:
        """Create paths from user settings."""
        return cls(eq_directory=user_settings.resolved_eq_directory())


class ApplicationSettings:
    """Application settings container.

    Combines user-provided configuration with application defaults so the
    extension and CLI build their stores the same way.

    Examples:
        user_settings = UserSettings.load()
        app_settings = ApplicationSettings(user_settings)
        directory = app_settings.paths.eq_directory
    """

    def __init__(
        self,
        user_settings: UserSettings,
        paths: AppPaths | None = None,
    ):
        """Initialize application settings with configuration sources."""
        self.user = user_settings
        self.paths = paths or AppPaths.from_user_settings(user_settings)

    @property
    def default_profile(self) -> Profile:
        return self.user.default_profile

    def create_repository(self) -> RecordRepository:
        """Record storage configured from these settings."""
        return RecordRepository(
            self.paths.eq_directory,
            key_scheme=self.user.key_scheme,
            legacy_fallback=self.user.legacy_fallback,
            legacy_preamp=self.user.legacy_preamp,
        )

    @classmethod
    def load(cls, config_path: Path | None = None) -> ApplicationSettings:
        """Load user settings and wrap them."""
        return cls(UserSettings.load(config_path))
