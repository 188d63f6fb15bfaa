"""Configuration loading for Auth0 API access and per-invocation settings."""

import os

import dotenv

from ..models.config import DEFAULT_CONCURRENCY, AppConfig, Auth0Config
from ..utils.i18n import resolve_locale
from .exceptions import AuthConfigError, ValidationError

# Global constants for API configuration
API_TIMEOUT = 30  # request timeout in seconds

CREDENTIALS_ENV_VAR = "BRANDPY_CREDENTIALS"
CONCURRENCY_ENV_VAR = "BRANDPY_CONCURRENCY"
REQUIRED_ENV_VARS = ("AUTH0_DOMAIN", "AUTH0_CLIENT_ID", "AUTH0_CLIENT_SECRET")


def check_env_file() -> None:
    """Check if .env file exists and load it."""
    env_path = ".env"
    if os.path.exists(env_path):
        dotenv.load_dotenv(env_path)


def validate_env_var(name: str, value: str | None) -> str:
    """Validate that an environment variable is set and not empty.

    Args:
        name: Environment variable name
        value: Environment variable value

    Returns:
        str: The validated value, stripped of surrounding whitespace

    Raises:
        AuthConfigError: If the environment variable is missing or empty
    """
    if not value or not value.strip():
        raise AuthConfigError(
            f"Environment variable {name} is required but not set or empty"
        )
    return value.strip()


def load_credentials_file(path: str) -> dict[str, str | None]:
    """Read Auth0 credentials from a dotenv-format file.

    Args:
        path: Path named by ``BRANDPY_CREDENTIALS``

    Returns:
        Dict[str, Optional[str]]: Variables defined in the file

    Raises:
        AuthConfigError: If the file does not exist
    """
    if not os.path.isfile(path):
        raise AuthConfigError(
            f"Credentials file not found: {path}",
            details=f"Set by {CREDENTIALS_ENV_VAR}",
        )
    return dict(dotenv.dotenv_values(path))


def get_env_config() -> Auth0Config:
    """Get Auth0 configuration from the environment.

    Values in the process environment take precedence over the credentials
    file named by ``BRANDPY_CREDENTIALS``.

    Returns:
        Auth0Config: Validated configuration

    Raises:
        AuthConfigError: If required variables are missing or malformed
    """
    check_env_file()

    values: dict[str, str | None] = {}
    credentials_path = os.getenv(CREDENTIALS_ENV_VAR)
    if credentials_path:
        values.update(load_credentials_file(credentials_path))

    for name in (*REQUIRED_ENV_VARS, "AUTH0_CONNECTION"):
        if os.getenv(name):
            values[name] = os.getenv(name)

    for name in REQUIRED_ENV_VARS:
        values[name] = validate_env_var(name, values.get(name))

    domain = values["AUTH0_DOMAIN"] or ""
    if domain.startswith(("http://", "https://")):
        raise AuthConfigError(
            f"Invalid Auth0 domain format: {domain}. "
            "Use the bare tenant domain without a scheme"
        )

    client_id = values["AUTH0_CLIENT_ID"] or ""
    if len(client_id) < 10:
        raise AuthConfigError(f"Invalid Auth0 client ID format: {client_id}")

    return Auth0Config.from_env_vars(values)


def get_concurrency() -> int:
    """Read the batch concurrency limit from ``BRANDPY_CONCURRENCY``.

    Returns:
        int: Configured limit, or DEFAULT_CONCURRENCY when unset

    Raises:
        ValidationError: If the value is not a positive integer
    """
    raw = os.getenv(CONCURRENCY_ENV_VAR, "").strip()
    if not raw:
        return DEFAULT_CONCURRENCY
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        raise ValidationError(
            f"{CONCURRENCY_ENV_VAR} must be a positive integer",
            field=CONCURRENCY_ENV_VAR,
            value=raw,
        )
    return value


def get_app_config(
    force_email: bool = False,
    force_phone: bool = False,
    locale: str | None = None,
) -> AppConfig:
    """Build the per-invocation configuration.

    Args:
        force_email: Treat every identifier as an email address
        force_phone: Treat every identifier as a phone number
        locale: Explicit locale; ``DEFAULT_LOCALE`` is used when omitted

    Returns:
        AppConfig: Immutable configuration object
    """
    check_env_file()
    return AppConfig(
        force_email=force_email,
        force_phone=force_phone,
        locale=resolve_locale(locale),
        concurrency=get_concurrency(),
    )
