"""Per-track equalizer settings persistence for media player hosts."""

__version__ = "0.1.0"
