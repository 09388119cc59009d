from pathlib import Path

from trackeq.store.errors import (
    FileOpenError,
    MalformedRecordError,
    MissingRecordError,
    NoActiveTrackError,
    SettingsStoreError,
)


def test_store_error_carries_path() -> None:
    err = MissingRecordError("No EQ settings file found for x", Path("/eq/x.txt"))
    assert isinstance(err, SettingsStoreError)
    assert str(err) == "No EQ settings file found for x"
    assert err.path == Path("/eq/x.txt")


def test_file_open_error_wraps_exception() -> None:
    try:
        raise PermissionError("denied")
    except PermissionError as e:
        err = FileOpenError("Error opening file for writing", Path("x.txt"), e)
        assert isinstance(err, SettingsStoreError)
        assert isinstance(err.original_error, OSError)


def test_malformed_is_store_error() -> None:
    assert issubclass(MalformedRecordError, SettingsStoreError)


def test_no_active_track_default_message() -> None:
    err = NoActiveTrackError()
    assert str(err) == "No item found"
    assert err.path is None
