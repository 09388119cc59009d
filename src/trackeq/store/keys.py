"""Settings key and file path computation."""

from __future__ import annotations

import hashlib
from pathlib import Path

from trackeq.common.enums import KeyScheme, Profile
from trackeq.constants import RECORD_SUFFIX, REPLACEMENT_CHARACTER, RESERVED_CHARACTERS

_SANITIZE_TABLE = str.maketrans({ch: REPLACEMENT_CHARACTER for ch in RESERVED_CHARACTERS})


def sanitize(track_id: str) -> str:
    """Replace filesystem-reserved characters with underscores.

    Note this is lossy: ``a:b`` and ``a/b`` both map to ``a_b``.

    Args:
        track_id: Track identifier (usually a URI)

    Returns:
        Identifier safe to use as a filename
    """
    return track_id.translate(_SANITIZE_TABLE)


def hashed(track_id: str) -> str:
    """Return the sha256 hex digest of a track identifier."""
    return hashlib.sha256(track_id.encode("utf-8")).hexdigest()


def track_key(track_id: str, scheme: KeyScheme = KeyScheme.SANITIZED) -> str:
    """Turn a track identifier into a filename stem using the given scheme."""
    if scheme is KeyScheme.HASHED:
        return hashed(track_id)
    return sanitize(track_id)


def settings_key(
    profile: Profile, track_id: str, scheme: KeyScheme = KeyScheme.SANITIZED
) -> str:
    """Build the profile-namespaced key, e.g. ``headphones_file____a.mp3``."""
    return f"{profile.value}_{track_key(track_id, scheme)}"


def settings_path(
    directory: Path,
    profile: Profile,
    track_id: str,
    scheme: KeyScheme = KeyScheme.SANITIZED,
) -> Path:
    """Path of the settings file for a (profile, track) pair."""
    return directory / f"{settings_key(profile, track_id, scheme)}{RECORD_SUFFIX}"


def legacy_path(directory: Path, track_id: str) -> Path:
    """Path of a pre-profile, bands-only settings file."""
    return directory / f"{sanitize(track_id)}{RECORD_SUFFIX}"
