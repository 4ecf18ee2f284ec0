"""Decode system and stake program instructions and summarise them for review."""

__version__ = "1.0.6"

__all__ = [
    "common",
    "system",
    "system_display",
    "stake",
    "stake_display",
]