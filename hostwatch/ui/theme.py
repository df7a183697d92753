"""
Hostwatch UI Theme - Color constants and styling definitions.
Log level colors follow the classic monitoring palette.
"""

from rich.style import Style
from rich.theme import Theme

COLORS = {
    "error": "#ef4444",
    "warning": "#eab308",
    "info": "#3b82f6",
    "debug": "#06b6d4",
    "fatal": "#a855f7",
    "secondary": "#6b7280",
}

SYMBOLS = {
    "error": "✗",
    "warning": "⚠",
}

HOSTWATCH_THEME = Theme({
    "error": Style(color=COLORS["error"], bold=True),
    "warning": Style(color=COLORS["warning"], bold=True),
    "secondary": Style(color=COLORS["secondary"], dim=True),
    # RichHandler level styles
    "logging.level.debug": Style(color=COLORS["debug"]),
    "logging.level.info": Style(color=COLORS["info"]),
    "logging.level.warning": Style(color=COLORS["warning"]),
    "logging.level.error": Style(color=COLORS["error"]),
    "logging.level.critical": Style(color=COLORS["fatal"], bold=True),
})
