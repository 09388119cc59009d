from pathlib import Path

import pytest

from trackeq.host.protocols import MockHost
from trackeq.store.repository import RecordRepository
from trackeq.store.settings_store import SettingsStore

TRACK_A = "file:///a.mp3"
TRACK_B = "file:///b.mp3"
BANDS_A = "1 2 3 4 5 6 7 8 9 10"
BANDS_B = "0 0 0 0 0 0 0 0 0 0"


@pytest.fixture
def eq_dir(tmp_path: Path) -> Path:
    return tmp_path / "eq_settings"


@pytest.fixture
def host() -> MockHost:
    return MockHost(TRACK_A, BANDS_A, "2.0")


@pytest.fixture
def repository(eq_dir: Path) -> RecordRepository:
    return RecordRepository(eq_dir)


@pytest.fixture
def store(host: MockHost, repository: RecordRepository) -> SettingsStore:
    store = SettingsStore(host, repository)
    store.on_activate()
    host.reset_call_history()
    return store
