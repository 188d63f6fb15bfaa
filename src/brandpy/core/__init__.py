"""Core functionality for BrandPy."""

from brandpy.core.auth import doctor
from brandpy.core.config import (
    check_env_file,
    get_app_config,
    get_env_config,
    validate_env_var,
)
from brandpy.core.directory import Auth0Directory, UserDirectory
from brandpy.core.exceptions import (
    APIError,
    AuthConfigError,
    BrandError,
    RateLimitError,
    ResolutionError,
    UserNotFoundError,
    UserOperationError,
    ValidationError,
)
from brandpy.core.sdk_operations import SDKUserOperations, get_sdk_operations

__all__ = [
    "doctor",
    "check_env_file",
    "get_app_config",
    "get_env_config",
    "validate_env_var",
    "Auth0Directory",
    "UserDirectory",
    "SDKUserOperations",
    "get_sdk_operations",
    "APIError",
    "AuthConfigError",
    "BrandError",
    "RateLimitError",
    "ResolutionError",
    "UserNotFoundError",
    "UserOperationError",
    "ValidationError",
]
