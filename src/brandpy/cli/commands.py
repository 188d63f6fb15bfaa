"""Command handlers for CLI operations."""

import asyncio
import sys
from collections.abc import Sequence

from ..core.auth import doctor
from ..core.directory import Auth0Directory, UserDirectory
from ..core.exceptions import BrandError
from ..core.sdk_operations import get_sdk_operations
from ..models.config import AppConfig
from ..operations.batch_runner import BatchResult
from ..operations.fake_ops import create_fake_users
from ..operations.user_ops import (
    create_user,
    delete_users,
    disable_users,
    enable_users,
    get_users,
    revoke_users,
    update_user,
)
from ..utils.display_utils import print_error, print_info, print_success
from ..utils.i18n import Translator
from ..utils.identifier_utils import IdentifierClassifier
from ..utils.logging_utils import get_logger
from .prompts import prompt_new_user, prompt_user_update

# Module logger
logger = get_logger(__name__)


class OperationHandler:
    """Handles CLI operations for BrandPy.

    Batch commands (disable, enable, delete, revoke, get, create --fake)
    always return normally once every item has settled; item failures are
    printed but do not change the exit status. Single-record commands
    (update, interactive create) exit with status 1 when they fail.
    """

    def __init__(
        self, config: AppConfig, directory: UserDirectory | None = None
    ) -> None:
        """Initialize the operation handler.

        Args:
            config: Per-invocation configuration
            directory: Directory to use; the Auth0 directory is built lazily
                when omitted
        """
        self.config = config
        self.translate = Translator(config.locale)
        self._directory = directory

    @property
    def directory(self) -> UserDirectory:
        if self._directory is None:
            self._directory = Auth0Directory(
                get_sdk_operations(), IdentifierClassifier(self.config)
            )
        return self._directory

    def _handle_operation_error(self, message: str) -> None:
        """Print a failure of a single-record command and exit."""
        print_error(message)
        sys.exit(1)

    def _log_summary(self, operation: str, result: BatchResult) -> None:
        logger.info(
            f"{operation} summary: {result.get_summary()}",
            extra={"operation": operation, "status": "completed"},
        )

    def handle_disable(self, identifiers: Sequence[str]) -> BatchResult:
        result = asyncio.run(
            disable_users(
                self.directory,
                list(identifiers),
                self.translate,
                concurrency=self.config.concurrency,
            )
        )
        self._log_summary("disable", result)
        return result

    def handle_enable(self, identifiers: Sequence[str]) -> BatchResult:
        result = asyncio.run(
            enable_users(
                self.directory,
                list(identifiers),
                self.translate,
                concurrency=self.config.concurrency,
            )
        )
        self._log_summary("enable", result)
        return result

    def handle_delete(self, identifiers: Sequence[str]) -> BatchResult:
        result = asyncio.run(
            delete_users(
                self.directory,
                list(identifiers),
                self.translate,
                concurrency=self.config.concurrency,
            )
        )
        self._log_summary("delete", result)
        return result

    def handle_revoke(self, identifiers: Sequence[str]) -> BatchResult:
        result = asyncio.run(
            revoke_users(
                self.directory,
                list(identifiers),
                self.translate,
                concurrency=self.config.concurrency,
            )
        )
        self._log_summary("revoke", result)
        return result

    def handle_get(self, identifiers: Sequence[str], detailed: bool) -> BatchResult:
        result = asyncio.run(
            get_users(
                self.directory,
                list(identifiers),
                self.translate,
                detailed,
                concurrency=self.config.concurrency,
            )
        )
        self._log_summary("get", result)
        return result

    def handle_update(self, identifier: str) -> None:
        """Fetch one user, prompt for new values and save them.

        Args:
            identifier: Email, phone number or user ID
        """
        try:
            user = asyncio.run(self.directory.get_user_by_identifier(identifier))
        except BrandError as e:
            self._handle_operation_error(
                self.translate("Couldn't fetch user for ID %s: %s", identifier, e)
            )
            return

        fields = prompt_user_update(user, self.translate)

        try:
            updated = asyncio.run(update_user(self.directory, user, fields))
        except BrandError as e:
            self._handle_operation_error(
                self.translate("Couldn't update user %s: %s", user.presentable_name, e)
            )
            return

        print_success(self.translate("Updated user %s.", updated.presentable_name))

    def handle_create(self, fake: int | None = None) -> BatchResult | None:
        """Create one user interactively, or ``fake`` synthetic users.

        Args:
            fake: Number of synthetic users to generate, if any

        Returns:
            Optional[BatchResult]: Batch outcomes when generating fake users
        """
        if fake:
            result = asyncio.run(
                create_fake_users(
                    self.directory,
                    fake,
                    self.translate,
                    faker_locale=self.config.faker_locale,
                    concurrency=self.config.concurrency,
                )
            )
            self._log_summary("create_fake", result)
            return result

        fields = prompt_new_user(self.translate)
        try:
            user = asyncio.run(create_user(self.directory, fields))
        except BrandError as e:
            self._handle_operation_error(self.translate("Couldn't create user: %s", e))
            return None

        print_success(self.translate("Created user %s.", user.presentable_name))
        return None

    def handle_doctor(self, test_api: bool) -> bool:
        """Check credentials and optionally API access.

        Returns:
            bool: True if the checks passed
        """
        result = doctor(test_api=test_api)
        if not result["success"]:
            print_error(f"{result['details']}: {result.get('error', '')}")
            return False

        print_info(f"Domain: {result['domain']}")
        print_info(f"Client ID: {result['client_id']}")
        if result.get("api_status") == "failed":
            print_error(result["details"])
            return False
        print_success(result["details"])
        return True
