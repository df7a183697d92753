"""Hostwatch UI - Themed terminal output."""

from .console import console, HostwatchConsole
from .theme import COLORS, SYMBOLS, HOSTWATCH_THEME

__all__ = ["console", "HostwatchConsole", "COLORS", "SYMBOLS", "HOSTWATCH_THEME"]
