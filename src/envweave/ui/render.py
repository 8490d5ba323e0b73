"""Render helpers for the envweave CLI."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from envweave.ui.console import get_console, get_error_console


def render_info(text: str) -> None:
    console = get_console()
    console.print(text, style="info", markup=False)


def render_success(text: str) -> None:
    console = get_console()
    console.print(text, style="success", markup=False)


def render_error(text: str) -> None:
    console = get_error_console()
    panel = Panel(
        Text(text, style="error"),
        box=box.ROUNDED,
        border_style="error",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_env_table(env: Mapping[str, str], title: str = "Environment") -> None:
    console = get_console()
    table = Table(show_header=True, box=None, pad_edge=False)
    table.add_column("Key", style="label", no_wrap=True)
    table.add_column("Value", style="value")

    for key, value in env.items():
        value_text = Text(value, style="value") if value else Text("(empty)", style="empty")
        table.add_row(Text(key, style="key"), value_text)

    panel = Panel(
        table,
        title=Text(title, style="step"),
        title_align="left",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_validation_panel(title: str, issues: Sequence[str], *, style: str) -> None:
    console = get_console()
    lines = []
    for issue in issues:
        lines.append(Text(f"- {issue}", style=style))
    panel = Panel(
        Group(*lines),
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)
