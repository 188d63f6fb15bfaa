"""Core SDK operations wrapper for Auth0 API calls.

This module is the only place that talks to the Management API. Every
method either returns the API payload or raises an exception from the
BrandPy hierarchy; callers decide whether a failure is fatal.
"""

from collections.abc import Callable
from typing import Any, cast
from urllib.parse import quote

import requests
from auth0.management import Auth0

from ..models.config import Auth0Config
from ..utils.logging_utils import get_logger
from .config import API_TIMEOUT
from .exceptions import APIError, UserNotFoundError, wrap_sdk_exception

USER_AGENT = "BrandPy/1.0 (Auth0 User Management CLI)"

# Module logger
logger = get_logger(__name__)


class SDKUserOperations:
    """Wrapper for SDK user operations with error translation."""

    def __init__(
        self,
        client: Auth0,
        config: Auth0Config,
        token_provider: Callable[[], str],
    ) -> None:
        """Initialize with an Auth0 management client.

        Args:
            client: Initialized Auth0 management client
            config: Tenant configuration, used for raw REST endpoints
            token_provider: Returns a management API token for raw REST calls
        """
        self.client = client
        self.config = config
        self.token_provider = token_provider

    def get_user(self, user_id: str) -> dict[str, Any]:
        """Get user details by ID.

        Args:
            user_id: Auth0 user ID

        Returns:
            User details dictionary

        Raises:
            UserNotFoundError: If the user does not exist
            BrandError: For any other API failure
        """
        try:
            return cast(dict[str, Any], self.client.users.get(user_id))
        except Exception as e:
            raise wrap_sdk_exception(e, f"get_user:{user_id}") from e

    def find_users_by_email(self, email: str) -> list[dict[str, Any]]:
        """Find users by email address.

        Args:
            email: Email address to search for

        Returns:
            List of user dictionaries, possibly empty
        """
        try:
            users = self.client.users_by_email.search_users_by_email(email)
        except Exception as e:
            raise wrap_sdk_exception(e, f"search_by_email:{email}") from e
        return cast(list[dict[str, Any]], users or [])

    def find_users_by_phone_number(self, phone_number: str) -> list[dict[str, Any]]:
        """Find users by phone number using a Lucene search.

        Args:
            phone_number: Phone number as typed by the operator

        Returns:
            List of user dictionaries, possibly empty
        """
        escaped = phone_number.replace("\\", "\\\\").replace('"', '\\"')
        query = f'phone_number:"{escaped}"'
        try:
            response = self.client.users.list(q=query, search_engine="v3")
        except Exception as e:
            raise wrap_sdk_exception(e, f"search_by_phone:{phone_number}") from e

        # SDK may return dict with 'users' key or list directly
        if isinstance(response, dict) and "users" in response:
            return cast(list[dict[str, Any]], response["users"])
        if isinstance(response, list):
            return cast(list[dict[str, Any]], response)
        return []

    def update_user(self, user_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """Update a user.

        Args:
            user_id: Auth0 user ID
            body: Update payload

        Returns:
            Updated user details
        """
        try:
            user = self.client.users.update(user_id, body)
        except Exception as e:
            raise wrap_sdk_exception(e, f"update_user:{user_id}") from e
        logger.info(
            f"Updated user {user_id}",
            extra={"user_id": user_id, "operation": "update_user"},
        )
        return cast(dict[str, Any], user)

    def delete_user(self, user_id: str) -> None:
        """Delete a user.

        Args:
            user_id: Auth0 user ID
        """
        try:
            self.client.users.delete(user_id)
        except Exception as e:
            raise wrap_sdk_exception(e, f"delete_user:{user_id}") from e
        logger.info(
            f"Deleted user {user_id}",
            extra={"user_id": user_id, "operation": "delete_user"},
        )

    def create_user(self, body: dict[str, Any]) -> dict[str, Any]:
        """Create a user in the configured database connection.

        Args:
            body: Create payload without the connection

        Returns:
            Created user details
        """
        payload = {"connection": self.config.connection, **body}
        try:
            user = self.client.users.create(payload)
        except Exception as e:
            raise wrap_sdk_exception(e, "create_user") from e
        logger.info(
            f"Created user {user.get('user_id')}",
            extra={"user_id": user.get("user_id"), "operation": "create_user"},
        )
        return cast(dict[str, Any], user)

    def revoke_sessions(self, user_id: str) -> None:
        """Revoke every session and refresh token issued to a user.

        Access tokens already minted stay valid until they expire.

        Args:
            user_id: Auth0 user ID
        """
        encoded = quote(user_id, safe="")
        for resource in ("sessions", "refresh-tokens"):
            self._delete(f"users/{encoded}/{resource}", user_id, "revoke_sessions")
        logger.info(
            f"Revoked sessions and refresh tokens for user {user_id}",
            extra={"user_id": user_id, "operation": "revoke_sessions"},
        )

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token_provider()}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _delete(self, endpoint: str, user_id: str, operation: str) -> None:
        url = self.config.get_api_url(endpoint)
        try:
            response = requests.delete(
                url, headers=self._build_headers(), timeout=API_TIMEOUT
            )
        except requests.exceptions.RequestException as e:
            raise APIError(
                f"Request failed: {e}", endpoint=endpoint, details=operation
            ) from e

        if response.status_code == 404:
            raise UserNotFoundError(
                "Resource not found",
                user_id=user_id,
                operation=operation,
                details=f"Status: {response.status_code}",
            )
        if response.status_code >= 400:
            raise APIError(
                response.reason or "Request failed",
                status_code=response.status_code,
                endpoint=endpoint,
                details=response.text or None,
            )


def get_sdk_operations(config: Auth0Config | None = None) -> SDKUserOperations:
    """Build the SDK operation wrapper for the configured tenant.

    Args:
        config: Auth0 configuration; read from the environment when omitted

    Returns:
        SDKUserOperations: Ready-to-use wrapper
    """
    from .auth0_client import Auth0ClientManager

    manager = Auth0ClientManager(config)
    return SDKUserOperations(manager.get_client(), manager.config, manager.get_token)
