"""Identifier classification utilities.

Operators name users by email address, phone number or raw user ID, and the
CLI has to guess which one it was given. The guess is a convenience, not
validation: anything that does not look like an email or a phone number is
passed to the directory verbatim, and the directory decides whether it
exists. The ``--email`` and ``--phone-number`` flags override the guess.
"""

import re
from enum import Enum

from ..models.config import AppConfig

EMAIL_PATTERN = re.compile(
    r"^(([^<>()\[\]\.,;:\s@\"]+(\.[^<>()\[\]\.,;:\s@\"]+)*)|(\".+\"))"
    r"@(([^<>()\[\]\.,;:\s@\"]+\.)+[^<>()\[\]\.,;:\s@\"]{2,})$",
    re.IGNORECASE,
)

PHONE_PATTERN = re.compile(
    r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$",
)


class IdentifierKind(str, Enum):
    """How an identifier is looked up in the directory."""

    EMAIL = "email"
    PHONE = "phone"
    OPAQUE = "opaque"


def is_email(value: str) -> bool:
    """Check whether a string is shaped like an email address.

    Args:
        value: String to check

    Returns:
        bool: True if the string matches the email pattern
    """
    return bool(EMAIL_PATTERN.match(value))


def is_phone_number(value: str) -> bool:
    """Check whether a string is shaped like a phone number.

    Accepts an optional leading ``+``, an optional parenthesized area code
    and 3+3+4..6 digit groups separated by ``-``, space or ``.``.

    Args:
        value: String to check

    Returns:
        bool: True if the string matches the phone pattern
    """
    return bool(PHONE_PATTERN.match(value))


def classify_identifier(
    value: str, force_email: bool = False, force_phone: bool = False
) -> IdentifierKind:
    """Decide how an operator-supplied identifier should be looked up.

    Force flags win over the shape heuristics; with both set, email wins.

    Args:
        value: Operator-supplied identifier
        force_email: Treat the identifier as an email address
        force_phone: Treat the identifier as a phone number

    Returns:
        IdentifierKind: The lookup kind
    """
    if force_email:
        return IdentifierKind.EMAIL
    if force_phone:
        return IdentifierKind.PHONE
    if is_email(value):
        return IdentifierKind.EMAIL
    if is_phone_number(value):
        return IdentifierKind.PHONE
    return IdentifierKind.OPAQUE


class IdentifierClassifier:
    """Classifier bound to the force flags of one invocation."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def classify(self, value: str) -> IdentifierKind:
        return classify_identifier(
            value,
            force_email=self.config.force_email,
            force_phone=self.config.force_phone,
        )
