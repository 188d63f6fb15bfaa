"""Operations module for BrandPy."""

# Batch runner
from brandpy.operations.batch_runner import (
    BatchReporter,
    BatchResult,
    BatchRunner,
    ItemOutcome,
    ItemState,
    run_batch,
)

# Synthetic users
from brandpy.operations.fake_ops import create_fake_users, generate_fake_user

# User operations
from brandpy.operations.user_ops import (
    ConsoleReporter,
    create_user,
    delete_users,
    disable_users,
    enable_users,
    get_users,
    revoke_users,
    set_users_disabled,
    update_user,
)

__all__ = [
    # Batch runner
    "BatchReporter",
    "BatchResult",
    "BatchRunner",
    "ItemOutcome",
    "ItemState",
    "run_batch",
    # User operations
    "ConsoleReporter",
    "create_user",
    "delete_users",
    "disable_users",
    "enable_users",
    "get_users",
    "revoke_users",
    "set_users_disabled",
    "update_user",
    # Synthetic users
    "create_fake_users",
    "generate_fake_user",
]
