"""User data models for BrandPy."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp from the Management API."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


@dataclass
class UserRecord:
    """A user record as stored in the identity directory."""

    user_id: str
    email: str | None = None
    email_verified: bool = False
    phone_number: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    disabled: bool = False
    custom_claims: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    last_login: datetime | None = None

    @classmethod
    def from_auth0_data(cls, data: dict[str, Any]) -> "UserRecord":
        """Create a UserRecord from Auth0 API response data.

        Args:
            data: Auth0 user data from API response

        Returns:
            UserRecord: Record with parsed data
        """
        return cls(
            user_id=data.get("user_id", ""),
            email=data.get("email"),
            email_verified=data.get("email_verified", False),
            phone_number=data.get("phone_number"),
            display_name=data.get("name"),
            photo_url=data.get("picture"),
            disabled=data.get("blocked", False),
            custom_claims=data.get("app_metadata") or {},
            created_at=_parse_timestamp(data.get("created_at")),
            last_login=_parse_timestamp(data.get("last_login")),
        )

    @property
    def presentable_name(self) -> str:
        """Best human-readable name: display name, email, phone number, then ID."""
        return self.display_name or self.email or self.phone_number or self.user_id

    def to_row(self, detailed: bool = False) -> dict[str, Any]:
        """Flatten the record into table columns.

        Args:
            detailed: Include custom claims, creation and last sign-in time

        Returns:
            Dict[str, Any]: Column name to value
        """
        row: dict[str, Any] = {
            "uid": self.user_id,
            "email": self.email,
            "emailVerified": self.email_verified,
            "displayName": self.display_name,
            "phoneNumber": self.phone_number,
            "disabled": self.disabled,
        }
        if detailed:
            row["customClaims"] = self.custom_claims or None
            row["creationTime"] = (
                self.created_at.isoformat() if self.created_at else None
            )
            row["lastSignInTime"] = (
                self.last_login.isoformat() if self.last_login else None
            )
        return row


@dataclass
class UserFields:
    """Settable user fields for create and update requests.

    ``None`` means "leave unset". Empty strings, as returned by prompts
    left blank, are treated the same way. ``False`` is a real value.
    """

    uid: str | None = None
    email: str | None = None
    email_verified: bool | None = None
    password: str | None = None
    display_name: str | None = None
    phone_number: str | None = None
    photo_url: str | None = None
    disabled: bool | None = None

    # Auth0 payload key for each field
    _PAYLOAD_KEYS = {
        "uid": "user_id",
        "email": "email",
        "email_verified": "email_verified",
        "password": "password",
        "display_name": "name",
        "phone_number": "phone_number",
        "photo_url": "picture",
        "disabled": "blocked",
    }

    def to_payload(self) -> dict[str, Any]:
        """Build the Management API request body, omitting unset fields."""
        payload: dict[str, Any] = {}
        for attr, key in self._PAYLOAD_KEYS.items():
            value = getattr(self, attr)
            if value is None or value == "":
                continue
            payload[key] = value
        return payload

    @property
    def presentable_name(self) -> str:
        return self.display_name or self.email or self.phone_number or self.uid or ""
