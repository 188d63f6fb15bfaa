"""BrandPy - Auth0 user administration from the command line."""

__version__ = "1.0.0"

# Core
from .core import (
    APIError,
    Auth0Directory,
    AuthConfigError,
    BrandError,
    RateLimitError,
    ResolutionError,
    UserDirectory,
    UserNotFoundError,
    UserOperationError,
    ValidationError,
    doctor,
    get_app_config,
    get_env_config,
)

# Models
from .models import AppConfig, Auth0Config, UserFields, UserRecord

# Operations
from .operations import (
    BatchResult,
    BatchRunner,
    ItemOutcome,
    ItemState,
    create_fake_users,
    create_user,
    delete_users,
    disable_users,
    enable_users,
    get_users,
    revoke_users,
    run_batch,
    update_user,
)

# Utilities
from .utils import IdentifierClassifier, IdentifierKind, Translator, classify_identifier

__all__ = [
    "__version__",
    # Core
    "doctor",
    "get_app_config",
    "get_env_config",
    "Auth0Directory",
    "UserDirectory",
    # Exceptions
    "BrandError",
    "AuthConfigError",
    "UserOperationError",
    "UserNotFoundError",
    "ResolutionError",
    "APIError",
    "RateLimitError",
    "ValidationError",
    # Models
    "AppConfig",
    "Auth0Config",
    "UserFields",
    "UserRecord",
    # Operations
    "BatchResult",
    "BatchRunner",
    "ItemOutcome",
    "ItemState",
    "run_batch",
    "create_fake_users",
    "create_user",
    "delete_users",
    "disable_users",
    "enable_users",
    "get_users",
    "revoke_users",
    "update_user",
    # Utilities
    "IdentifierClassifier",
    "IdentifierKind",
    "Translator",
    "classify_identifier",
]
