from collections.abc import Generator
from pathlib import Path

import pytest

from trackeq.common.enums import LoadOutcome, Profile
from trackeq.controller import EqualizerExtension
from trackeq.host.protocols import EventSink, MockHost
from trackeq.settings.application import ApplicationSettings
from trackeq.settings.user import UserSettings

TRACK_A = "file:///a.mp3"
TRACK_B = "file:///b.mp3"


class BrokenHost(MockHost):
    """Host whose item lookup blows up."""

    def get_active_track_identifier(self) -> str | None:
        raise RuntimeError("input gone")


@pytest.fixture
def settings(eq_dir: Path) -> ApplicationSettings:
    return ApplicationSettings(UserSettings(eq_directory=eq_dir))


@pytest.fixture
def extension(
    host: MockHost, settings: ApplicationSettings
) -> Generator[EqualizerExtension, None, None]:
    ext = EqualizerExtension(host, settings=settings)
    yield ext
    ext.on_deactivate()


def test_descriptor() -> None:
    descriptor = EqualizerExtension.descriptor()
    assert descriptor["title"] == "Custom Equalizer Settings"
    assert descriptor["capabilities"] == ["input-listener"]


def test_extension_is_an_event_sink(extension: EqualizerExtension) -> None:
    assert isinstance(extension, EventSink)


def test_callbacks_ignored_until_activated(
    extension: EqualizerExtension, eq_dir: Path
) -> None:
    extension.on_track_changed()
    extension.on_metadata_changed()
    assert extension.store is None
    assert not eq_dir.exists()


def test_activate_builds_store_and_forwards_logs(
    extension: EqualizerExtension, host: MockHost, eq_dir: Path
) -> None:
    extension.on_activate()

    assert extension.active
    assert eq_dir.is_dir()
    assert f"No EQ settings file found for {TRACK_A}" in host.info_messages


def test_save_and_restore_through_callbacks(
    extension: EqualizerExtension, host: MockHost, eq_dir: Path
) -> None:
    extension.on_activate()
    extension.on_metadata_changed()
    assert (eq_dir / "headphones_file____a.mp3.txt").exists()
    assert any(m.startswith("EQ settings saved to ") for m in host.info_messages)

    host.play(TRACK_B)
    extension.on_track_changed()
    host.adjust("0 0 0 0 0 0 0 0 0 0", 0.0)
    extension.on_metadata_changed()

    host.play(TRACK_A)
    extension.on_track_changed()
    assert host.bands == "1 2 3 4 5 6 7 8 9 10"
    assert host.preamp == 2.0


def test_deactivate_drops_store_and_log_handler(
    extension: EqualizerExtension, host: MockHost
) -> None:
    extension.on_activate()
    extension.on_deactivate()
    host.reset_call_history()

    assert extension.store is None
    extension.on_track_changed()
    assert host.info_messages == []


def test_errors_do_not_reach_host(eq_dir: Path) -> None:
    host = BrokenHost()
    ext = EqualizerExtension(host, settings=ApplicationSettings(UserSettings(eq_directory=eq_dir)))
    try:
        ext.on_activate()
        ext.on_track_changed()
        assert any("input gone" in m for m in host.error_messages)
    finally:
        ext.on_deactivate()


def test_select_profile_before_activation(
    extension: EqualizerExtension,
) -> None:
    assert extension.select_profile(Profile.SPEAKERS) is LoadOutcome.SKIPPED
    extension.on_activate()
    assert extension.store is not None
    assert extension.store.profile is Profile.SPEAKERS


def test_selector_buttons_switch_profile(
    extension: EqualizerExtension, host: MockHost, eq_dir: Path
) -> None:
    eq_dir.mkdir()
    (eq_dir / "speakers_file____a.mp3.txt").write_text("bands:5 5 5\npreamp:-1\n")
    extension.on_activate()

    assert extension.selector.labels == ["Headphones", "Speakers"]
    assert extension.selector.press("Speakers") is LoadOutcome.APPLIED
    assert extension.selector.active is Profile.SPEAKERS
    assert host.bands == "5 5 5"

    assert extension.selector.press("Headphones") is LoadOutcome.NOT_FOUND
    assert extension.profile is Profile.HEADPHONES


def test_default_profile_from_settings(host: MockHost, eq_dir: Path) -> None:
    settings = ApplicationSettings(
        UserSettings(eq_directory=eq_dir, default_profile=Profile.SPEAKERS)
    )
    ext = EqualizerExtension(host, settings=settings)
    assert ext.profile is Profile.SPEAKERS
    assert ext.selector.active is Profile.SPEAKERS


def test_bad_config_falls_back_to_defaults(
    monkeypatch: pytest.MonkeyPatch, host: MockHost, tmp_path: Path
) -> None:
    monkeypatch.setenv("TRACKEQ_CONFIG", str(tmp_path / "missing.yaml"))

    ext = EqualizerExtension(host)
    assert ext.profile is Profile.HEADPHONES
    assert ext.settings.user == UserSettings()
    assert any("Using default settings" in m for m in host.error_messages)


def test_invalid_config_falls_back_to_defaults(host: MockHost, tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("key_scheme: md5\n")

    ext = EqualizerExtension(host, config_path=cfg)
    assert ext.settings.user == UserSettings()
    assert host.error_messages
