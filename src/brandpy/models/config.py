"""Configuration data models for BrandPy."""

from dataclasses import dataclass
from typing import Any

DEFAULT_CONNECTION = "Username-Password-Authentication"
DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = ("en", "sv")
# Directory calls a batch keeps in flight at once
DEFAULT_CONCURRENCY = 10


@dataclass
class Auth0Config:
    """Configuration for Auth0 Management API access."""

    domain: str
    client_id: str
    client_secret: str
    connection: str = DEFAULT_CONNECTION
    base_url: str | None = None

    def __post_init__(self) -> None:
        """Set base_url after initialization if not provided."""
        if self.base_url is None:
            self.base_url = f"https://{self.domain}"

    @classmethod
    def from_env_vars(cls, env_vars: dict[str, str | None]) -> "Auth0Config":
        """Create Auth0Config from a mapping of environment variables.

        Args:
            env_vars: Mapping of environment variable names to values

        Returns:
            Auth0Config: Configuration instance

        Raises:
            ValueError: If required environment variables are missing
        """
        domain = env_vars.get("AUTH0_DOMAIN")
        client_id = env_vars.get("AUTH0_CLIENT_ID")
        client_secret = env_vars.get("AUTH0_CLIENT_SECRET")

        if not domain:
            raise ValueError("Missing AUTH0_DOMAIN environment variable")
        if not client_id:
            raise ValueError("Missing AUTH0_CLIENT_ID environment variable")
        if not client_secret:
            raise ValueError("Missing AUTH0_CLIENT_SECRET environment variable")

        return cls(
            domain=domain,
            client_id=client_id,
            client_secret=client_secret,
            connection=env_vars.get("AUTH0_CONNECTION") or DEFAULT_CONNECTION,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary format.

        Returns:
            Dict[str, Any]: Configuration as dictionary
        """
        return {
            "domain": self.domain,
            "client_id": self.client_id,
            "client_secret": "***REDACTED***",  # Don't expose secrets
            "connection": self.connection,
            "base_url": self.base_url,
        }

    def get_api_url(self, endpoint: str = "") -> str:
        """Get the Management API URL for this configuration.

        Args:
            endpoint: API endpoint to append (optional)

        Returns:
            str: Management API URL
        """
        base_api_url = f"{self.base_url}/api/v2"
        if endpoint:
            endpoint = endpoint.lstrip("/")
            return f"{base_api_url}/{endpoint}"
        return base_api_url

    @property
    def audience(self) -> str:
        """Audience for client credentials grants."""
        return f"https://{self.domain}/api/v2/"


@dataclass(frozen=True)
class AppConfig:
    """Per-invocation settings shared by the classifier and the batch runner.

    Built once from CLI flags and the environment and passed explicitly to
    the components that need it.
    """

    force_email: bool = False
    force_phone: bool = False
    locale: str = DEFAULT_LOCALE
    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(
                f"Concurrency must be at least 1, got {self.concurrency}"
            )
        if self.locale not in SUPPORTED_LOCALES:
            raise ValueError(
                f"Unsupported locale '{self.locale}'. "
                f"Supported locales: {', '.join(SUPPORTED_LOCALES)}"
            )

    @property
    def faker_locale(self) -> str:
        """Locale name understood by Faker."""
        return {"en": "en_US", "sv": "sv_SE"}[self.locale]
