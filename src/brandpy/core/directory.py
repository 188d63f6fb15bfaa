"""Async user directory capability and its Auth0 implementation."""

import asyncio
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from ..models.user import UserFields, UserRecord
from ..utils.identifier_utils import IdentifierClassifier, IdentifierKind
from ..utils.logging_utils import get_logger
from .exceptions import ResolutionError, UserNotFoundError
from .sdk_operations import SDKUserOperations

T = TypeVar("T")

# Module logger
logger = get_logger(__name__)


class UserDirectory(Protocol):
    """Capabilities the CLI needs from an identity directory."""

    async def get_user_id_by_identifier(self, identifier: str) -> str:
        """Resolve an email, phone number or raw ID to a user ID."""
        ...

    async def get_user_by_identifier(self, identifier: str) -> UserRecord:
        """Fetch the record named by an email, phone number or raw ID."""
        ...

    async def set_disabled(self, user_id: str, disabled: bool) -> UserRecord:
        ...

    async def delete_user(self, user_id: str) -> None:
        ...

    async def revoke_sessions(self, user_id: str) -> None:
        ...

    async def update_user(self, user_id: str, fields: UserFields) -> UserRecord:
        ...

    async def create_user(self, fields: UserFields) -> UserRecord:
        ...


class Auth0Directory:
    """UserDirectory backed by the Auth0 Management API.

    The SDK is synchronous, so each call runs in a worker thread and the
    event loop only coordinates.
    """

    def __init__(self, ops: SDKUserOperations, classifier: IdentifierClassifier):
        """Initialize the directory.

        Args:
            ops: SDK wrapper used for every API call
            classifier: Decides how identifiers are looked up
        """
        self.ops = ops
        self.classifier = classifier

    async def _call(self, func: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(func, *args)

    async def _lookup(self, identifier: str, kind: IdentifierKind) -> dict[str, Any]:
        if kind is IdentifierKind.EMAIL:
            users = await self._call(self.ops.find_users_by_email, identifier)
        else:
            users = await self._call(self.ops.find_users_by_phone_number, identifier)

        if not users:
            raise UserNotFoundError(
                f"No user found for {kind.value} {identifier}",
                operation="resolve",
            )
        if len(users) > 1:
            raise ResolutionError(
                f"{len(users)} users share {kind.value} {identifier}; use a user ID",
                identifier=identifier,
                candidates=[user.get("user_id", "") for user in users],
            )
        return users[0]

    async def get_user_id_by_identifier(self, identifier: str) -> str:
        kind = self.classifier.classify(identifier)
        logger.debug(
            f"Resolving {identifier} as {kind.value}",
            extra={"identifier": identifier, "operation": "resolve"},
        )
        if kind is IdentifierKind.OPAQUE:
            return identifier
        user = await self._lookup(identifier, kind)
        return str(user["user_id"])

    async def get_user_by_identifier(self, identifier: str) -> UserRecord:
        kind = self.classifier.classify(identifier)
        if kind is IdentifierKind.OPAQUE:
            data = await self._call(self.ops.get_user, identifier)
        else:
            data = await self._lookup(identifier, kind)
        return UserRecord.from_auth0_data(data)

    async def set_disabled(self, user_id: str, disabled: bool) -> UserRecord:
        data = await self._call(self.ops.update_user, user_id, {"blocked": disabled})
        return UserRecord.from_auth0_data(data)

    async def delete_user(self, user_id: str) -> None:
        await self._call(self.ops.delete_user, user_id)

    async def revoke_sessions(self, user_id: str) -> None:
        await self._call(self.ops.revoke_sessions, user_id)

    async def update_user(self, user_id: str, fields: UserFields) -> UserRecord:
        payload = fields.to_payload()
        # The user ID is immutable once created
        payload.pop("user_id", None)
        data = await self._call(self.ops.update_user, user_id, payload)
        return UserRecord.from_auth0_data(data)

    async def create_user(self, fields: UserFields) -> UserRecord:
        data = await self._call(self.ops.create_user, fields.to_payload())
        return UserRecord.from_auth0_data(data)
