"""Rich utilities: shared console, themes, and helpers."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as rich_traceback_install

_console: Console | None = None


def get_console() -> Console:
    """Return a shared Rich Console instance.

    Creates the console on first use with a pleasant default theme.
    """
    global _console
    if _console is None:
        theme = Theme(
            {
                "info": "cyan",
                "warning": "yellow",
                "error": "red",
                "success": "green",
                "muted": "grey62",
            }
        )
        _console = Console(theme=theme, highlight=False, soft_wrap=False)
    return _console


def install_rich_tracebacks() -> None:
    """Enable rich tracebacks globally for nicer error output."""
    rich_traceback_install(show_locals=False, word_wrap=True, suppress=["click"])


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        return ", ".join(f"{key}={val}" for key, val in value.items())
    return str(value)


def build_table(rows: list[dict[str, Any]]) -> Table:
    """Build a table whose columns are the keys of the first row.

    Args:
        rows: Row dictionaries sharing the same keys

    Returns:
        Table: Renderable table
    """
    table = Table(show_header=True, header_style="bold")
    if not rows:
        return table

    for column in rows[0]:
        table.add_column(column)
    for row in rows:
        # Cells hold directory data, which must never be parsed as markup
        table.add_row(*(Text(_format_cell(value)) for value in row.values()))
    return table
