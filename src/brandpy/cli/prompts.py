"""Interactive prompts for editing and creating users."""

from typing import Any

import click

from ..models.user import UserFields, UserRecord
from ..utils.i18n import Translator


def _prompt_text(label: str, current: str | None = None, **kwargs: Any) -> str:
    # Blank input keeps the current value, or leaves the field unset
    return click.prompt(
        label, default=current or "", show_default=bool(current), **kwargs
    )


def prompt_user_update(user: UserRecord, translate: Translator) -> UserFields:
    """Ask for new values, offering the current ones as defaults.

    Fields left blank are not sent to the directory.

    Args:
        user: Record being edited
        translate: Translator for prompt labels

    Returns:
        UserFields: Edited fields
    """
    return UserFields(
        email=_prompt_text(translate("Email"), user.email),
        email_verified=click.confirm(
            translate("Email verified"), default=user.email_verified
        ),
        display_name=_prompt_text(translate("Display name"), user.display_name),
        phone_number=_prompt_text(translate("Phone number"), user.phone_number),
        photo_url=_prompt_text(translate("Photo URL"), user.photo_url),
        disabled=click.confirm(translate("Disabled"), default=user.disabled),
    )


def prompt_new_user(translate: Translator) -> UserFields:
    """Ask for the fields of a new user.

    Args:
        translate: Translator for prompt labels

    Returns:
        UserFields: Fields for ``create_user``
    """
    return UserFields(
        uid=_prompt_text(translate("UID")),
        email=_prompt_text(translate("Email")),
        email_verified=click.confirm(translate("Email verified"), default=False),
        password=_prompt_text(translate("Password"), hide_input=True),
        display_name=_prompt_text(translate("Display name")),
        photo_url=_prompt_text(translate("Photo URL")),
        disabled=click.confirm(translate("Disabled"), default=False),
    )
