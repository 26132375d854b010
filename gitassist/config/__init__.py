"""Configuration package."""

from gitassist.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
