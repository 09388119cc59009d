"""Shared enums used across trackeq."""
