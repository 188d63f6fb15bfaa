"""User operations applied to batches of operator-supplied identifiers."""

from collections.abc import Callable

from ..core.directory import UserDirectory
from ..models.config import DEFAULT_CONCURRENCY
from ..models.user import UserFields, UserRecord
from ..utils.display_utils import print_error, print_info, print_success, print_table
from ..utils.i18n import Translator
from ..utils.logging_utils import get_logger
from .batch_runner import BatchResult, BatchRunner, ItemOutcome

# Module logger
logger = get_logger(__name__)

RESOLUTION_FAILED_MESSAGE = "Couldn't fetch UID for ID %s: %s"


def _reason(error: BaseException | None) -> str:
    return str(error) if error is not None else ""


class ConsoleReporter:
    """Prints one localized line per settled item.

    Args:
        translate: Translator for the active locale
        success_message: Template taking the subject of a successful item
        failure_message: Template taking the user ID and the failure reason
        success_subject: Picks the subject from a successful outcome;
            defaults to the resolved user ID
        resolution_message: Template taking the identifier and the reason
    """

    def __init__(
        self,
        translate: Translator,
        success_message: str,
        failure_message: str,
        success_subject: Callable[[ItemOutcome], str] | None = None,
        resolution_message: str = RESOLUTION_FAILED_MESSAGE,
    ) -> None:
        self.translate = translate
        self.success_message = success_message
        self.failure_message = failure_message
        self.success_subject = success_subject or (
            lambda outcome: outcome.user_id or outcome.identifier
        )
        self.resolution_message = resolution_message

    def resolution_failed(self, outcome: ItemOutcome) -> None:
        print_error(
            self.translate(
                self.resolution_message, outcome.identifier, _reason(outcome.error)
            )
        )

    def action_succeeded(self, outcome: ItemOutcome) -> None:
        if self.success_message:
            print_success(
                self.translate(self.success_message, self.success_subject(outcome))
            )

    def action_failed(self, outcome: ItemOutcome) -> None:
        print_error(
            self.translate(
                self.failure_message,
                outcome.user_id or outcome.identifier,
                _reason(outcome.error),
            )
        )


def _record_name(outcome: ItemOutcome) -> str:
    record: UserRecord = outcome.value
    return record.presentable_name


async def set_users_disabled(
    directory: UserDirectory,
    identifiers: list[str],
    disabled: bool,
    translate: Translator,
    concurrency: int | None = DEFAULT_CONCURRENCY,
) -> BatchResult[UserRecord]:
    """Disable or enable every identified user.

    Args:
        directory: Identity directory
        identifiers: Emails, phone numbers or user IDs
        disabled: True to prevent sign-in, False to allow it
        translate: Translator for console lines
        concurrency: Maximum directory calls in flight

    Returns:
        BatchResult: Updated records per identifier
    """
    if disabled:
        operation = "disable"
        reporter = ConsoleReporter(
            translate,
            "Disabled user %s.",
            "Couldn't disable user %s: %s",
            success_subject=_record_name,
        )
    else:
        operation = "enable"
        reporter = ConsoleReporter(
            translate,
            "Enabled user %s.",
            "Couldn't enable user %s: %s",
            success_subject=_record_name,
        )

    async def act(user_id: str) -> UserRecord:
        return await directory.set_disabled(user_id, disabled)

    runner: BatchRunner[UserRecord] = BatchRunner(
        operation, reporter, concurrency
    )
    return await runner.run(identifiers, directory.get_user_id_by_identifier, act)


async def disable_users(
    directory: UserDirectory,
    identifiers: list[str],
    translate: Translator,
    concurrency: int | None = DEFAULT_CONCURRENCY,
) -> BatchResult[UserRecord]:
    return await set_users_disabled(
        directory, identifiers, True, translate, concurrency
    )


async def enable_users(
    directory: UserDirectory,
    identifiers: list[str],
    translate: Translator,
    concurrency: int | None = DEFAULT_CONCURRENCY,
) -> BatchResult[UserRecord]:
    return await set_users_disabled(
        directory, identifiers, False, translate, concurrency
    )


async def delete_users(
    directory: UserDirectory,
    identifiers: list[str],
    translate: Translator,
    concurrency: int | None = DEFAULT_CONCURRENCY,
) -> BatchResult[None]:
    """Permanently delete every identified user.

    Args:
        directory: Identity directory
        identifiers: Emails, phone numbers or user IDs
        translate: Translator for console lines

    Returns:
        BatchResult: One outcome per identifier
    """
    reporter = ConsoleReporter(
        translate, "Deleted user %s.", "Couldn't delete user %s: %s"
    )
    runner: BatchRunner[None] = BatchRunner(
        "delete", reporter, concurrency
    )
    return await runner.run(
        identifiers, directory.get_user_id_by_identifier, directory.delete_user
    )


async def revoke_users(
    directory: UserDirectory,
    identifiers: list[str],
    translate: Translator,
    concurrency: int | None = DEFAULT_CONCURRENCY,
) -> BatchResult[None]:
    """Revoke sessions and refresh tokens of every identified user.

    Access tokens that were already issued stay valid until they expire.

    Args:
        directory: Identity directory
        identifiers: Emails, phone numbers or user IDs
        translate: Translator for console lines

    Returns:
        BatchResult: One outcome per identifier
    """
    reporter = ConsoleReporter(
        translate,
        "Revoked refresh tokens for user %s.",
        "Couldn't revoke refresh tokens for user %s: %s",
    )
    runner: BatchRunner[None] = BatchRunner(
        "revoke", reporter, concurrency
    )
    return await runner.run(
        identifiers, directory.get_user_id_by_identifier, directory.revoke_sessions
    )


async def get_users(
    directory: UserDirectory,
    identifiers: list[str],
    translate: Translator,
    detailed: bool = False,
    concurrency: int | None = DEFAULT_CONCURRENCY,
) -> BatchResult[UserRecord]:
    """Fetch every identified user and print them as a table.

    Users that could not be fetched are reported and left out of the table.

    Args:
        directory: Identity directory
        identifiers: Emails, phone numbers or user IDs
        translate: Translator for console lines
        detailed: Include custom claims, creation and last sign-in time
        concurrency: Maximum directory calls in flight

    Returns:
        BatchResult: Fetched records per identifier
    """
    reporter = ConsoleReporter(translate, "", "Couldn't fetch user for ID %s: %s")
    runner: BatchRunner[UserRecord] = BatchRunner(
        "get", reporter, concurrency
    )
    result = await runner.run_each(identifiers, directory.get_user_by_identifier)

    if not result.values:
        print_info(translate("No users found."))
        return result

    print_table([record.to_row(detailed) for record in result.values])
    return result


async def update_user(
    directory: UserDirectory, user: UserRecord, fields: UserFields
) -> UserRecord:
    """Apply edited fields to an existing user.

    Args:
        directory: Identity directory
        user: Record being edited
        fields: New field values

    Returns:
        UserRecord: Updated record

    Raises:
        BrandError: If the directory rejects the update
    """
    logger.info(
        f"Updating user {user.user_id}",
        extra={"user_id": user.user_id, "operation": "update"},
    )
    return await directory.update_user(user.user_id, fields)


async def create_user(directory: UserDirectory, fields: UserFields) -> UserRecord:
    """Create one user from operator-supplied fields.

    Raises:
        BrandError: If the directory rejects the new user
    """
    logger.info("Creating user", extra={"operation": "create"})
    return await directory.create_user(fields)
