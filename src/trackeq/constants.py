from typing import Final

from trackeq import __version__

# Settings files
EQ_DIRECTORY_NAME: Final = "eq_settings"
RECORD_SUFFIX: Final = ".txt"
RECORD_ENCODING: Final = "utf-8"

# Characters that cannot appear in a settings filename
RESERVED_CHARACTERS: Final = ':/\\?*|"<>'
REPLACEMENT_CHARACTER: Final = "_"

# Preamp pushed for legacy bands-only records; non-zero enables the equalizer
LEGACY_PREAMP: Final = 1.0

# Extension descriptor reported to the host
EXTENSION_TITLE: Final = "Custom Equalizer Settings"
EXTENSION_VERSION: Final = __version__
EXTENSION_CAPABILITIES: Final = ("input-listener",)
