"""Common utility functions and helpers for the trackeq package."""

from trackeq.utils.file import ensure_directory_exists

__all__ = ["ensure_directory_exists"]
