"""Utilities module for BrandPy."""

from .display_utils import (
    print_error,
    print_info,
    print_success,
    print_table,
    print_warning,
)
from .i18n import Translator, resolve_locale
from .identifier_utils import (
    IdentifierClassifier,
    IdentifierKind,
    classify_identifier,
    is_email,
    is_phone_number,
)
from .logging_utils import configure_from_env, get_logger, setup_logging
from .rich_utils import build_table, get_console, install_rich_tracebacks

__all__ = [
    # Identifier utilities
    "IdentifierClassifier",
    "IdentifierKind",
    "classify_identifier",
    "is_email",
    "is_phone_number",
    # Display utilities
    "print_error",
    "print_info",
    "print_success",
    "print_table",
    "print_warning",
    # Rich utilities
    "build_table",
    "get_console",
    "install_rich_tracebacks",
    # Localization
    "Translator",
    "resolve_locale",
    # Logging utilities
    "configure_from_env",
    "get_logger",
    "setup_logging",
]
