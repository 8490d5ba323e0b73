"""Shared consoles for the envweave CLI."""

from __future__ import annotations

from rich.console import Console

from envweave.ui.theme import THEME

_CONSOLE = Console(theme=THEME, highlight=False)
_ERROR_CONSOLE = Console(theme=THEME, highlight=False, stderr=True)


def get_console() -> Console:
    return _CONSOLE


def get_error_console() -> Console:
    return _ERROR_CONSOLE
