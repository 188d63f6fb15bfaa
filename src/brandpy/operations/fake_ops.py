"""Synthetic user generation for populating test tenants."""

from faker import Faker

from ..core.directory import UserDirectory
from ..core.exceptions import ValidationError
from ..models.config import DEFAULT_CONCURRENCY
from ..models.user import UserFields, UserRecord
from ..utils.i18n import Translator
from .batch_runner import BatchResult, BatchRunner, ItemOutcome
from .user_ops import ConsoleReporter

# Upper bound on one `create --fake` invocation
MAX_FAKE_USERS = 1000


def generate_fake_user(fake: Faker) -> UserFields:
    """Build fields for one synthetic, enabled, unverified user.

    Args:
        fake: Faker instance; its locale decides names and domains

    Returns:
        UserFields: Fields ready for ``create_user``
    """
    first_name = fake.first_name()
    last_name = fake.last_name()
    return UserFields(
        email=fake.unique.ascii_free_email(),
        email_verified=False,
        password=fake.password(length=16, special_chars=True),
        display_name=f"{first_name} {last_name}",
        photo_url=fake.image_url(),
        disabled=False,
    )


def _created_name(outcome: ItemOutcome) -> str:
    record: UserRecord = outcome.value
    return record.presentable_name


async def create_fake_users(
    directory: UserDirectory,
    count: int,
    translate: Translator,
    faker_locale: str = "en_US",
    seed: int | None = None,
    concurrency: int | None = DEFAULT_CONCURRENCY,
) -> BatchResult[UserRecord]:
    """Create ``count`` synthetic users concurrently.

    Args:
        directory: Identity directory
        count: Number of users to create
        translate: Translator for console lines
        faker_locale: Locale for generated names
        seed: Optional seed for reproducible data
        concurrency: Maximum directory calls in flight

    Returns:
        BatchResult: Created records, one outcome per generated user

    Raises:
        ValidationError: If count is outside 1..MAX_FAKE_USERS
    """
    if count < 1 or count > MAX_FAKE_USERS:
        raise ValidationError(
            f"Fake user count must be between 1 and {MAX_FAKE_USERS}",
            field="fake",
            value=str(count),
        )

    fake = Faker(faker_locale)
    if seed is not None:
        fake.seed_instance(seed)

    users = [generate_fake_user(fake) for _ in range(count)]
    reporter = ConsoleReporter(
        translate,
        "Created user %s.",
        "Couldn't create fake user %s: %s",
        success_subject=_created_name,
    )
    runner: BatchRunner[UserRecord] = BatchRunner(
        "create_fake", reporter, concurrency
    )
    return await runner.run_each(
        users, directory.create_user, describe=lambda user: user.presentable_name
    )
