# src/trackeq/host/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HostPlayer(Protocol):
    """Protocol defining what the extension needs from a media player host.

    This abstracts the player's extension API (current item, audio output
    equalizer variables, dialogs and message log) so the settings store can
    run against any player, or against ``MockHost`` in tests.
    """

    def get_active_track_identifier(self) -> str | None:
        """Return the URI of the currently loaded item, or None."""
        ...

    def get_equalizer_bands(self) -> str:
        """Return the host-native band levels string."""
        ...

    def get_equalizer_preamp(self) -> str | float:
        """Return the current preamp gain."""
        ...

    def set_equalizer_bands(self, bands: str) -> None:
        """Apply band levels to the audio output."""
        ...

    def set_equalizer_preamp(self, preamp: float) -> None:
        """Apply preamp gain to the audio output."""
        ...

    def notify_ui_refresh(self) -> None:
        """Ask the host to re-read equalizer state into any visible UI."""
        ...

    def log_info(self, message: str) -> None:
        """Write an informational line to the host message log."""
        ...

    def log_error(self, message: str) -> None:
        """Write an error line to the host message log."""
        ...


@runtime_checkable
class EventSink(Protocol):
    """Lifecycle and input callbacks the host invokes, serially, on one thread."""

    def on_activate(self) -> None:
        """Extension was enabled."""
        ...

    def on_deactivate(self) -> None:
        """Extension was disabled."""
        ...

    def on_track_changed(self) -> None:
        """The active input changed."""
        ...

    def on_metadata_changed(self) -> None:
        """Metadata of the active input changed."""
        ...


class MockHost:
    """In-memory implementation of HostPlayer for testing and replays."""

    def __init__(
        self,
        track_id: str | None = None,
        bands: str = "",
        preamp: str | float = 0.0,
    ) -> None:
        self.track_id = track_id
        self.bands = bands
        self.preamp: str | float = preamp
        self.set_bands_calls: list[str] = []
        self.set_preamp_calls: list[float] = []
        self.refresh_calls = 0
        self.info_messages: list[str] = []
        self.error_messages: list[str] = []

    def get_active_track_identifier(self) -> str | None:
        return self.track_id

    def get_equalizer_bands(self) -> str:
        return self.bands

    def get_equalizer_preamp(self) -> str | float:
        return self.preamp

    def set_equalizer_bands(self, bands: str) -> None:
        self.set_bands_calls.append(bands)
        self.bands = bands

    def set_equalizer_preamp(self, preamp: float) -> None:
        self.set_preamp_calls.append(preamp)
        self.preamp = preamp

    def notify_ui_refresh(self) -> None:
        self.refresh_calls += 1

    def log_info(self, message: str) -> None:
        self.info_messages.append(message)

    def log_error(self, message: str) -> None:
        self.error_messages.append(message)

    # ---- test helpers ----
    def play(self, track_id: str | None) -> None:
        """Switch the active track (does not fire callbacks)."""
        self.track_id = track_id

    def adjust(self, bands: str, preamp: str | float) -> None:
        """Simulate the user moving equalizer sliders."""
        self.bands = bands
        self.preamp = preamp

    @property
    def mutation_count(self) -> int:
        """Number of times equalizer state was pushed by the extension."""
        return len(self.set_bands_calls)

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.set_bands_calls = []
        self.set_preamp_calls = []
        self.refresh_calls = 0
        self.info_messages = []
        self.error_messages = []
