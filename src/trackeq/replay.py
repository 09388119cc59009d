"""Replay a scripted listening session against a mock host.

A script is YAML, either a list of events or a mapping with an ``events``
list. Each event is a single-key mapping (or a bare string for events that
take no argument)::

    events:
      - activate
      - play: file:///a.mp3
      - eq: {bands: "1 2 3 4 5 6 7 8 9 10", preamp: 2.0}
      - play: file:///b.mp3
      - profile: Speakers
      - deactivate

``play`` switches track and fires track-changed, ``eq`` moves the sliders
and fires metadata-changed, ``metadata`` fires metadata-changed alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import yaml

from trackeq.controller import EqualizerExtension
from trackeq.host.protocols import MockHost

logger: Final = logging.getLogger(__name__)

EVENT_NAMES: Final = ("activate", "deactivate", "play", "eq", "metadata", "profile")


@dataclass
class ReplayStep:
    """One replayed event and the host state right after it."""

    event: str
    argument: Any
    track_id: str | None
    bands: str
    preamp: str | float


def load_script(path: Path) -> list[Any]:
    """Read the event list from a YAML script.

    Raises:
        RuntimeError: If the file is not valid YAML or has no event list
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise RuntimeError(f"Unable to read replay script: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("events")
    if not isinstance(data, list):
        raise RuntimeError("Replay script must be a list of events or have an 'events' list")
    return data


def _split_event(raw: Any) -> tuple[str, Any]:
    if isinstance(raw, str):
        name, argument = raw, None
    elif isinstance(raw, dict) and len(raw) == 1:
        ((name, argument),) = raw.items()
    else:
        raise ValueError(f"Malformed event: {raw!r}")
    if name not in EVENT_NAMES:
        raise ValueError(f"Unknown event {name!r}; expected one of {', '.join(EVENT_NAMES)}")
    return name, argument


def replay(extension: EqualizerExtension, host: MockHost, events: list[Any]) -> list[ReplayStep]:
    """Feed events to the extension as the host would.

    Raises:
        ValueError: If an event is malformed
    """
    steps: list[ReplayStep] = []
    for raw in events:
        name, argument = _split_event(raw)
        logger.debug("Replaying %s %r", name, argument)

        if name == "activate":
            extension.on_activate()
        elif name == "deactivate":
            extension.on_deactivate()
        elif name == "play":
            host.play(None if argument is None else str(argument))
            extension.on_track_changed()
        elif name == "eq":
            if not isinstance(argument, dict) or not {"bands", "preamp"} <= argument.keys():
                raise ValueError(f"eq event needs bands and preamp: {argument!r}")
            host.adjust(str(argument["bands"]), argument["preamp"])
            extension.on_metadata_changed()
        elif name == "metadata":
            extension.on_metadata_changed()
        elif name == "profile":
            extension.selector.press(str(argument))

        steps.append(ReplayStep(name, argument, host.track_id, host.bands, host.preamp))
    return steps
