from __future__ import annotations

from enum import Enum


class Profile(str, Enum):
    """Listening profile selecting the namespace records are stored under.

    The value is the filename prefix; ``label`` is what the selector shows.
    """

    HEADPHONES = "headphones"
    SPEAKERS = "speakers"

    @property
    def label(self) -> str:
        """Human readable button label (e.g. Headphones)."""
        return self.value.capitalize()

    @classmethod
    def from_label(cls, label: str) -> Profile:
        """Look up a profile by label or value, case-insensitive."""
        try:
            return cls(label.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown profile: {label!r}") from None


class KeyScheme(str, Enum):
    """How a track identifier is turned into a filename."""

    SANITIZED = "sanitized"  # reserved characters replaced with "_"
    HASHED = "hashed"  # sha256 hex digest, collision free


class LoadOutcome(Enum):
    """Result of a load-if-new attempt."""

    APPLIED = "applied"
    SKIPPED = "skipped"  # same identifier as the last load
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    UNREADABLE = "unreadable"
    NO_TRACK = "no_track"
