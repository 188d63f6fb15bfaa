"""Display utilities for operator-facing console output."""

from typing import Any

from .rich_utils import build_table, get_console


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message
    """
    get_console().print(message, style="success", markup=False)


def print_error(message: str) -> None:
    """Print an error message.

    Args:
        message: Error message
    """
    get_console().print(message, style="error", markup=False)


def print_warning(message: str) -> None:
    get_console().print(message, style="warning", markup=False)


def print_info(message: str) -> None:
    get_console().print(message, style="info", markup=False)


def print_table(rows: list[dict[str, Any]]) -> None:
    """Print rows as a table; nothing is printed for an empty list.

    Args:
        rows: Row dictionaries sharing the same keys
    """
    if rows:
        get_console().print(build_table(rows))
