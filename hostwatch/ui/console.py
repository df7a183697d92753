"""Hostwatch Console - Themed console singleton with semantic message methods."""

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape

from .theme import HOSTWATCH_THEME, SYMBOLS


class HostwatchConsole:
    """Themed console with semantic message methods."""

    _instance: Optional['HostwatchConsole'] = None

    def __new__(cls) -> 'HostwatchConsole':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._console = RichConsole(theme=HOSTWATCH_THEME)
        return cls._instance

    @property
    def rich(self) -> RichConsole:
        return self._console

    def error(self, message: str, details: Optional[str] = None) -> None:
        self._console.print(f"[error]{SYMBOLS['error']} {escape(message)}[/]")
        if details:
            self._console.print(f"  [secondary]{escape(details)}[/]")

    def warning(self, message: str) -> None:
        self._console.print(f"[warning]{SYMBOLS['warning']}  {escape(message)}[/]")


console = HostwatchConsole()
