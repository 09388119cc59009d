from pathlib import Path

import pytest
from typer.testing import CliRunner

from trackeq.cli import app
from trackeq.common.enums import Profile
from trackeq.store.records import EqRecord
from trackeq.store.repository import RecordRepository

runner = CliRunner()

TRACK = "file:///a.mp3"

REPLAY_YAML = """\
events:
  - activate
  - play: file:///a.mp3
  - eq: {bands: "1 2 3 4 5 6 7 8 9 10", preamp: 2.0}
  - play: file:///b.mp3
  - eq: {bands: "0 0 0 0 0 0 0 0 0 0", preamp: 0.0}
  - play: file:///a.mp3
  - deactivate
"""


@pytest.fixture
def config_file(tmp_path: Path, eq_dir: Path) -> Path:
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"eq_directory: {eq_dir}\n")
    return cfg


@pytest.fixture
def stored(eq_dir: Path) -> RecordRepository:
    eq_dir.mkdir()
    repo = RecordRepository(eq_dir)
    repo.write(Profile.HEADPHONES, TRACK, EqRecord(bands="1 2 3", preamp="2.0"))
    return repo


def test_path_command(config_file: Path, eq_dir: Path) -> None:
    result = runner.invoke(app, ["path", TRACK, "--config", str(config_file)])
    assert result.exit_code == 0
    assert result.output.strip() == str(eq_dir / "headphones_file____a.mp3.txt")


def test_path_command_profile(config_file: Path) -> None:
    result = runner.invoke(app, ["path", TRACK, "-p", "speakers", "-c", str(config_file)])
    assert result.exit_code == 0
    assert result.output.strip().endswith("speakers_file____a.mp3.txt")


def test_show_command(config_file: Path, stored: RecordRepository) -> None:
    result = runner.invoke(app, ["show", TRACK, "--config", str(config_file)])
    assert result.exit_code == 0
    assert "bands:  1 2 3" in result.output
    assert "preamp: 2.0" in result.output


def test_show_missing_record(config_file: Path) -> None:
    result = runner.invoke(app, ["show", "file:///nothing.mp3", "--config", str(config_file)])
    assert result.exit_code == 1


def test_show_malformed_record(config_file: Path, eq_dir: Path) -> None:
    eq_dir.mkdir()
    (eq_dir / "headphones_file____a.mp3.txt").write_text("preamp:1\n")
    result = runner.invoke(app, ["show", TRACK, "--config", str(config_file)])
    assert result.exit_code == 2


def test_list_command(config_file: Path, stored: RecordRepository) -> None:
    stored.write(Profile.SPEAKERS, TRACK, EqRecord(bands="0", preamp="0"))

    result = runner.invoke(app, ["list", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "headphones_file____a.mp3.txt" in result.output
    assert "speakers_file____a.mp3.txt" in result.output

    result = runner.invoke(app, ["list", "-p", "speakers", "--config", str(config_file)])
    assert "headphones_file____a.mp3.txt" not in result.output


def test_replay_command(config_file: Path, tmp_path: Path, eq_dir: Path) -> None:
    script = tmp_path / "session.yaml"
    script.write_text(REPLAY_YAML)

    result = runner.invoke(app, ["replay", str(script), "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert (eq_dir / "headphones_file____a.mp3.txt").read_text() == (
        "bands:1 2 3 4 5 6 7 8 9 10\npreamp:2.0\n"
    )
    assert (eq_dir / "headphones_file____b.mp3.txt").exists()
    # last play restored a.mp3's settings
    assert "play file:///a.mp3 → bands='1 2 3 4 5 6 7 8 9 10' preamp=2.0" in result.output


def test_replay_bad_script(config_file: Path, tmp_path: Path) -> None:
    script = tmp_path / "bad.yaml"
    script.write_text("events:\n  - dance\n")
    result = runner.invoke(app, ["replay", str(script), "--config", str(config_file)])
    assert result.exit_code == 1


def test_config_validate(tmp_path: Path) -> None:
    good = tmp_path / "good.yaml"
    good.write_text("key_scheme: hashed\n")
    result = runner.invoke(app, ["config", "validate", str(good)])
    assert result.exit_code == 0
    assert "Config valid" in result.output

    bad = tmp_path / "bad.yaml"
    bad.write_text("default_profile: subwoofer\n")
    result = runner.invoke(app, ["config", "validate", str(bad)])
    assert result.exit_code == 1


def test_config_wizard(tmp_path: Path, eq_dir: Path) -> None:
    dst = tmp_path / "out.yaml"
    result = runner.invoke(
        app, ["config", "wizard", str(dst)], input=f"{eq_dir}\nspeakers\nhashed\n"
    )
    assert result.exit_code == 0, result.output
    text = dst.read_text()
    assert "default_profile: speakers" in text
    assert "key_scheme: hashed" in text
