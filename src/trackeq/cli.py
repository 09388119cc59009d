"""Track equalizer CLI application.

This module provides the command-line interface for inspecting stored
per-track equalizer records, replaying scripted sessions, and validating
configuration.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from trackeq.common.enums import Profile
from trackeq.controller import EqualizerExtension
from trackeq.host.protocols import MockHost
from trackeq.replay import load_script, replay
from trackeq.settings.application import ApplicationSettings
from trackeq.settings.user import UserSettings
from trackeq.store.errors import (
    FileOpenError,
    MalformedRecordError,
    MissingRecordError,
)

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Per-track equalizer settings CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "trackeq.cli"

CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
PROFILE_OPTION = typer.Option(
    Profile.HEADPHONES, "--profile", "-p", help="Profile namespace to use"
)
ALL_PROFILES_OPTION = typer.Option(None, "--profile", "-p", help="Only list this profile")
TRACK_ARGUMENT = typer.Argument(..., help="Track identifier (URI)")
SCRIPT_ARGUMENT = typer.Argument(..., exists=True, dir_okay=False, help="Replay script (YAML)")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _load_settings(config: Path | None) -> ApplicationSettings:
    try:
        return ApplicationSettings.load(config)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def path(
    track: str = TRACK_ARGUMENT,
    profile: Profile = PROFILE_OPTION,
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Print the settings file used for a track."""
    repository = _load_settings(config).create_repository()
    typer.echo(str(repository.path_for(profile, track)))


@app.command()
def show(
    track: str = TRACK_ARGUMENT,
    profile: Profile = PROFILE_OPTION,
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Show the equalizer record stored for a track."""
    repository = _load_settings(config).create_repository()
    try:
        record = repository.read(profile, track)
    except MissingRecordError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc
    except (MalformedRecordError, FileOpenError) as exc:
        typer.secho(exc.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc

    typer.echo(f"bands:  {record.bands}")
    typer.echo(f"preamp: {record.preamp}")
    if record.legacy:
        typer.echo("(legacy record)")


@app.command("list")
def list_records(
    profile: Profile | None = ALL_PROFILES_OPTION,
    config: Path | None = CONFIG_OPTION,
) -> None:
    """List stored settings files."""
    repository = _load_settings(config).create_repository()
    count = 0
    for record_path in repository.iter_paths(profile):
        typer.echo(record_path.name)
        count += 1
    if count == 0:
        typer.echo(f"No EQ settings stored in {repository.directory}", err=True)


@app.command("replay")
def replay_session(
    script: Path = SCRIPT_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Replay a scripted session against an in-memory player."""
    settings = _load_settings(config)
    host = MockHost()
    extension = EqualizerExtension(host, settings=settings, debug=debug)

    try:
        steps = replay(extension, host, load_script(script))
    except (RuntimeError, ValueError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    for step in steps:
        argument = "" if step.argument is None else f" {step.argument}"
        typer.echo(f"{step.event}{argument} → bands={step.bands!r} preamp={step.preamp}")
    for message in host.error_messages:
        typer.secho(message, fg=typer.colors.YELLOW, err=True)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "eq_directory": typer.prompt(
                "Settings directory", default=str(UserSettings().resolved_eq_directory())
            ),
            "default_profile": typer.prompt(
                "Default profile [headphones|speakers]", default="headphones"
            ),
            "key_scheme": typer.prompt("Filename scheme [sanitized|hashed]", default="sanitized"),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(
        yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False), encoding="utf-8"
    )
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    main()
