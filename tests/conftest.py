from unittest.mock import MagicMock

import pytest

from brandpy.core.exceptions import UserNotFoundError, UserOperationError
from brandpy.models.config import AppConfig, Auth0Config
from brandpy.models.user import UserFields, UserRecord
from brandpy.utils.i18n import Translator
from brandpy.utils.identifier_utils import IdentifierClassifier, IdentifierKind


class FakeDirectory:
    """In-memory UserDirectory used by operation and CLI tests."""

    def __init__(self, users=None, config=None):
        self.users = {user.user_id: user for user in users or []}
        self.classifier = IdentifierClassifier(config or AppConfig())
        self.calls = []
        self.fail_actions_for = set()
        self._created = 0

    def _matching(self, identifier, kind):
        attr = "email" if kind is IdentifierKind.EMAIL else "phone_number"
        matches = [u for u in self.users.values() if getattr(u, attr) == identifier]
        if not matches:
            raise UserNotFoundError(
                f"No user found for {kind.value} {identifier}", operation="resolve"
            )
        return matches[0]

    def _existing(self, user_id):
        if user_id in self.fail_actions_for:
            raise UserOperationError("Simulated failure", user_id=user_id)
        if user_id not in self.users:
            raise UserNotFoundError("Resource not found", user_id=user_id)
        return self.users[user_id]

    async def get_user_id_by_identifier(self, identifier):
        self.calls.append(("resolve", identifier))
        kind = self.classifier.classify(identifier)
        if kind is IdentifierKind.OPAQUE:
            return identifier
        return self._matching(identifier, kind).user_id

    async def get_user_by_identifier(self, identifier):
        self.calls.append(("get", identifier))
        kind = self.classifier.classify(identifier)
        if kind is IdentifierKind.OPAQUE:
            return self._existing(identifier)
        return self._matching(identifier, kind)

    async def set_disabled(self, user_id, disabled):
        self.calls.append(("set_disabled", user_id, disabled))
        self._existing(user_id).disabled = disabled
        return self.users[user_id]

    async def delete_user(self, user_id):
        self.calls.append(("delete", user_id))
        self._existing(user_id)
        del self.users[user_id]

    async def revoke_sessions(self, user_id):
        self.calls.append(("revoke", user_id))
        self._existing(user_id)

    async def update_user(self, user_id, fields: UserFields):
        self.calls.append(("update", user_id))
        user = self._existing(user_id)
        payload = fields.to_payload()
        user.email = payload.get("email", user.email)
        user.email_verified = payload.get("email_verified", user.email_verified)
        user.display_name = payload.get("name", user.display_name)
        user.phone_number = payload.get("phone_number", user.phone_number)
        user.photo_url = payload.get("picture", user.photo_url)
        user.disabled = payload.get("blocked", user.disabled)
        return user

    async def create_user(self, fields: UserFields):
        self.calls.append(("create", fields.email))
        if fields.email and any(u.email == fields.email for u in self.users.values()):
            raise UserOperationError("The user already exists", operation="create")
        self._created += 1
        user = UserRecord(
            user_id=fields.uid or f"auth0|fake{self._created}",
            email=fields.email or None,
            email_verified=bool(fields.email_verified),
            phone_number=fields.phone_number or None,
            display_name=fields.display_name or None,
            photo_url=fields.photo_url or None,
            disabled=bool(fields.disabled),
        )
        self.users[user.user_id] = user
        return user


@pytest.fixture
def sample_users():
    """Two users reachable by email and one by phone number."""
    return [
        UserRecord(user_id="auth0|a", email="a@x.com", display_name="Alice"),
        UserRecord(user_id="auth0|b", email="b@x.com", display_name="Bob"),
        UserRecord(user_id="sms|c", phone_number="+46701234567"),
    ]


@pytest.fixture
def directory(sample_users):
    """In-memory directory seeded with the sample users."""
    return FakeDirectory(sample_users)


@pytest.fixture
def translate():
    """English translator."""
    return Translator("en")


@pytest.fixture
def auth0_config():
    """Auth0 configuration for a test tenant."""
    return Auth0Config(
        domain="test.auth0.com",
        client_id="test_client_id_123",
        client_secret="test_client_secret",
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove BrandPy and Auth0 variables from the environment."""
    for name in (
        "AUTH0_DOMAIN",
        "AUTH0_CLIENT_ID",
        "AUTH0_CLIENT_SECRET",
        "AUTH0_CONNECTION",
        "BRANDPY_CREDENTIALS",
        "DEFAULT_LOCALE",
        "BRANDPY_CONCURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_auth0_client():
    """Create a mock Auth0 management client."""
    client = MagicMock()

    # Mock users resource
    client.users = MagicMock()
    client.users.get = MagicMock(
        return_value={"user_id": "test_user_id", "email": "test@example.com"}
    )
    client.users.delete = MagicMock()
    client.users.update = MagicMock(
        return_value={"user_id": "test_user_id", "blocked": True}
    )
    client.users.create = MagicMock(
        return_value={"user_id": "auth0|new", "email": "new@example.com"}
    )
    client.users.list = MagicMock(return_value={"users": [], "total": 0})

    # Mock users_by_email resource
    client.users_by_email = MagicMock()
    client.users_by_email.search_users_by_email = MagicMock(return_value=[])

    return client


@pytest.fixture
def mock_get_token():
    """Create a mock GetToken instance."""
    get_token = MagicMock()
    get_token.client_credentials = MagicMock(
        return_value={"access_token": "test_token", "expires_in": 86400}
    )
    return get_token


@pytest.fixture
def mock_response():
    """Create a mock response object for requests."""
    response = MagicMock()
    response.status_code = 204
    response.reason = "No Content"
    response.text = ""
    return response
