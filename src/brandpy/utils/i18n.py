"""Console message localization.

Messages are keyed by their English source text and use ``%s``
placeholders. Unknown messages fall back to the source text, so a missing
translation never breaks output.
"""

import os

from ..models.config import DEFAULT_LOCALE, SUPPORTED_LOCALES

SV_CATALOG: dict[str, str] = {
    "Couldn't fetch UID for ID %s: %s": "Kunde inte hämta UID för ID %s: %s",
    "Couldn't fetch user for ID %s: %s": "Kunde inte hämta användare för ID %s: %s",
    "Disabled user %s.": "Inaktiverade användaren %s.",
    "Couldn't disable user %s: %s": "Kunde inte inaktivera användaren %s: %s",
    "Enabled user %s.": "Aktiverade användaren %s.",
    "Couldn't enable user %s: %s": "Kunde inte aktivera användaren %s: %s",
    "Deleted user %s.": "Raderade användaren %s.",
    "Couldn't delete user %s: %s": "Kunde inte radera användaren %s: %s",
    "Revoked refresh tokens for user %s.": "Återkallade uppdateringstokens för användaren %s.",
    "Couldn't revoke refresh tokens for user %s: %s": (
        "Kunde inte återkalla uppdateringstokens för användaren %s: %s"
    ),
    "Updated user %s.": "Uppdaterade användaren %s.",
    "Couldn't update user %s: %s": "Kunde inte uppdatera användaren %s: %s",
    "Created user %s.": "Skapade användaren %s.",
    "Couldn't create user: %s": "Kunde inte skapa användaren: %s",
    "Couldn't create fake user %s: %s": "Kunde inte skapa den falska användaren %s: %s",
    "No users found.": "Inga användare hittades.",
    "Email": "E-post",
    "Email verified": "E-post verifierad",
    "Password": "Lösenord",
    "Display name": "Visningsnamn",
    "Phone number": "Telefonnummer",
    "Photo URL": "Foto-URL",
    "Disabled": "Inaktiverad",
    "UID": "UID",
}

CATALOGS: dict[str, dict[str, str]] = {
    "en": {},
    "sv": SV_CATALOG,
}


class Translator:
    """Looks up console messages in one locale's catalog."""

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        if locale not in CATALOGS:
            raise ValueError(
                f"Unsupported locale '{locale}'. "
                f"Supported locales: {', '.join(SUPPORTED_LOCALES)}"
            )
        self.locale = locale
        self._catalog = CATALOGS[locale]

    def gettext(self, message: str, *args: object) -> str:
        """Translate a message and interpolate ``%s`` arguments.

        Args:
            message: English source message
            *args: Values for the message placeholders

        Returns:
            str: Translated, formatted message
        """
        template = self._catalog.get(message, message)
        if args:
            return template % args
        return template

    __call__ = gettext


def resolve_locale(value: str | None = None) -> str:
    """Pick a supported locale from an explicit value or ``DEFAULT_LOCALE``.

    Region suffixes are ignored (``sv_SE`` and ``sv-SE`` select ``sv``);
    anything unsupported falls back to English.
    """
    raw = value if value is not None else os.getenv("DEFAULT_LOCALE", "")
    language = raw.replace("-", "_").split("_")[0].lower()
    if language in SUPPORTED_LOCALES:
        return language
    return DEFAULT_LOCALE
