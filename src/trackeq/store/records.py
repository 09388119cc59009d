"""Equalizer record model and its on-disk text schema.

A record file holds one ``key:value`` pair per line, in any order::

    bands:1 2 3 4 5 6 7 8 9 10
    preamp:2.0

Keys are split on the first colon only. An optional ``version:<int>`` line
names the schema version; unknown keys are ignored so newer writers can add
fields without breaking the validity check, which only requires ``bands`` and
``preamp`` to be present.

Legacy files predate profiles: their whole content is the raw bands string.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar, Final

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from trackeq.constants import LEGACY_PREAMP
from trackeq.store.errors import MalformedRecordError

SCHEMA_VERSION: Final = 1

BANDS_KEY: Final = "bands"
PREAMP_KEY: Final = "preamp"
VERSION_KEY: Final = "version"


class EqRecord(BaseModel):
    """Persisted equalizer state for one (profile, track) pair.

    ``preamp`` is kept as the exact string that was read or written so a
    round trip reproduces the file byte for byte.
    """

    model_config = ConfigDict(frozen=True)

    REQUIRED_KEYS: ClassVar[tuple[str, ...]] = (BANDS_KEY, PREAMP_KEY)

    bands: str
    preamp: str
    legacy: bool = False

    @field_validator("preamp", mode="before")
    @classmethod
    def coerce_preamp(cls, v: Any) -> Any:
        """Accept numeric preamp values and require a finite float."""
        if isinstance(v, bool):
            raise ValueError("preamp must be numeric")
        if isinstance(v, (int, float, str)):
            try:
                value = float(v)  # ValueError for non-numeric strings
            except OverflowError:
                raise ValueError("preamp out of range") from None
            if not math.isfinite(value):
                raise ValueError("preamp must be finite")
            return v.strip() if isinstance(v, str) else str(v)
        return v

    @field_validator("bands")
    @classmethod
    def single_line_bands(cls, v: str) -> str:
        """Bands must fit on one line of the record file."""
        if "\n" in v or "\r" in v:
            raise ValueError("bands must not contain line breaks")
        return v

    @property
    def preamp_value(self) -> float:
        """Preamp gain as a number, ready to hand to the host."""
        return float(self.preamp)

    def to_text(self) -> str:
        """Serialize as schema version 1 (``bands``/``preamp`` lines)."""
        return f"{BANDS_KEY}:{self.bands}\n{PREAMP_KEY}:{self.preamp}\n"

    @classmethod
    def from_state(cls, bands: str, preamp: str | float) -> EqRecord:
        """Build a record from equalizer state read off the host."""
        try:
            return cls(bands=bands, preamp=preamp)  # type: ignore[arg-type]
        except ValidationError as err:
            raise MalformedRecordError(f"Invalid equalizer state: {err}") from err

    @classmethod
    def parse(cls, text: str) -> EqRecord:
        """Parse the key-prefixed text format.

        Args:
            text: File content

        Returns:
            Validated record

        Raises:
            MalformedRecordError: If a required field is missing, the preamp
                is not numeric, or the schema version is unsupported
        """
        fields = parse_fields(text)

        version = fields.get(VERSION_KEY)
        if version is not None:
            try:
                number = int(version)
            except ValueError:
                raise MalformedRecordError(f"Invalid schema version: {version!r}") from None
            if number > SCHEMA_VERSION:
                raise MalformedRecordError(f"Unsupported schema version: {number}")

        missing = [key for key in cls.REQUIRED_KEYS if key not in fields]
        if missing:
            raise MalformedRecordError(f"Missing field(s): {', '.join(missing)}")

        try:
            return cls(bands=fields[BANDS_KEY], preamp=fields[PREAMP_KEY])
        except ValidationError as err:
            raise MalformedRecordError(f"Invalid preamp: {fields[PREAMP_KEY]!r}") from err

    @classmethod
    def parse_legacy(cls, text: str, preamp: float = LEGACY_PREAMP) -> EqRecord:
        """Parse a bands-only legacy file, filling in a default preamp."""
        bands = text.strip()
        if not bands:
            raise MalformedRecordError("Empty legacy settings file")
        if any(key in parse_fields(text) for key in cls.REQUIRED_KEYS):
            raise MalformedRecordError("Keyed record where a legacy bands-only file was expected")
        if "\n" in bands or "\r" in bands:
            raise MalformedRecordError("Legacy bands span several lines")
        return cls(bands=bands, preamp=preamp, legacy=True)  # type: ignore[arg-type]


def parse_fields(text: str) -> dict[str, str]:
    """Split ``key:value`` lines into a dict; later duplicates win."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fields[key.strip()] = value
    return fields
