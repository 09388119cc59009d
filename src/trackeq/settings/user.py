"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from trackeq.common.enums import KeyScheme, Profile
from trackeq.constants import EQ_DIRECTORY_NAME, LEGACY_PREAMP

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


def default_user_data_dir() -> Path:
    """Per-user data directory (``$XDG_DATA_HOME/trackeq`` or ~/.local/share)."""
    base = os.environ.get("XDG_DATA_HOME") or "~/.local/share"
    return Path(base).expanduser() / "trackeq"


class UserSettings(BaseModel):
    """User settings for where and how equalizer records are stored.

    Every field has a default, so the extension runs without a config file.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/trackeq/config.yaml").expanduser(),
        Path("/etc/trackeq/config.yaml"),
    ]

    # Storage
    eq_directory: Path | None = Field(
        None,
        description="Directory holding settings files "
        "(default: <user data dir>/eq_settings)",
    )
    key_scheme: KeyScheme = Field(
        KeyScheme.SANITIZED,
        description="'sanitized' keeps filenames readable but may collide; "
        "'hashed' is collision free",
    )

    # Profiles
    default_profile: Profile = Field(
        Profile.HEADPHONES, description="Profile active when the extension starts"
    )

    # Legacy bands-only files
    legacy_fallback: bool = Field(
        True, description="Read pre-profile settings files when no record exists"
    )
    legacy_preamp: float = Field(
        LEGACY_PREAMP,
        ge=-20.0,
        le=20.0,
        description="Preamp (dB) applied with legacy records",
    )

    # ---- validators ----
    @field_validator("eq_directory")
    @classmethod
    def expand_directory(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    @field_validator("default_profile", mode="before")
    @classmethod
    def parse_profile(cls, v: object) -> object:
        """Accept labels such as ``Speakers`` as well as enum values."""
        if isinstance(v, str):
            return Profile.from_label(v)
        return v

    # ---- convenience methods ----
    def resolved_eq_directory(self) -> Path:
        """Settings directory, falling back to the per-user default."""
        return self.eq_directory or default_user_data_dir() / EQ_DIRECTORY_NAME

    @classmethod
    def find_config(cls) -> Path | None:
        """Locate a config file via TRACKEQ_CONFIG or the default paths.

        Raises:
            FileNotFoundError: If TRACKEQ_CONFIG names a missing file
        """
        env_path = os.environ.get("TRACKEQ_CONFIG")
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(f"Config file from TRACKEQ_CONFIG not found: {path}")
            return path

        for default_path in cls.DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return default_path
        return None

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if
                None and falls back to defaults when nothing is found)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If TRACKEQ_CONFIG points to a missing file
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            path = cls.find_config()
            if path is None:
                return cls()

        # Load and parse config
        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
