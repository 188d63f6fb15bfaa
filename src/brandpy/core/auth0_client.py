"""Auth0 SDK client wrapper for centralized management API access."""

from auth0.authentication import GetToken
from auth0.management import Auth0
from auth0.rest import RestClientOptions

from ..models.config import Auth0Config
from ..utils.logging_utils import get_logger
from .config import API_TIMEOUT, get_env_config
from .exceptions import AuthConfigError

# Auth0 token request timeout in seconds
AUTH0_TOKEN_TIMEOUT = 5

# Module logger
logger = get_logger(__name__)

# Global client cache keyed by tenant domain
_client_cache: dict[str, Auth0] = {}


class Auth0ClientManager:
    """Manager for Auth0 SDK client instances and the management token."""

    def __init__(self, config: Auth0Config | None = None) -> None:
        """Initialize the Auth0 client manager.

        Args:
            config: Auth0 configuration; read from the environment when omitted
        """
        self.config = config or get_env_config()
        self._client: Auth0 | None = None
        self._token: str | None = None

    def get_client(self) -> Auth0:
        """Get or create an Auth0 management client.

        Returns:
            Auth0: Initialized management client

        Raises:
            AuthConfigError: If client initialization fails
        """
        cache_key = self.config.domain

        if cache_key in _client_cache:
            logger.debug(f"Reusing cached Auth0 client for {cache_key}")
            return _client_cache[cache_key]

        if self._token is None:
            self._token = self._get_management_token()

        try:
            self._client = Auth0(
                domain=self.config.domain,
                token=self._token,
                rest_options=RestClientOptions(timeout=float(API_TIMEOUT)),
            )
            _client_cache[cache_key] = self._client

            logger.info(
                f"Initialized Auth0 management client for {self.config.domain}",
                extra={"operation": "client_init"},
            )

            return self._client

        except Exception as e:
            logger.error(
                f"Failed to initialize Auth0 client: {e}",
                extra={"operation": "client_init", "error": str(e)},
                exc_info=True,
            )
            raise AuthConfigError(
                f"Failed to initialize Auth0 client for {self.config.domain}: {e}"
            ) from e

    def _get_management_token(self) -> str:
        """Get management API access token using client credentials.

        Returns:
            str: Access token

        Raises:
            AuthConfigError: If token acquisition fails
        """
        try:
            get_token = GetToken(
                domain=self.config.domain,
                client_id=self.config.client_id,
                client_secret=self.config.client_secret,
                timeout=AUTH0_TOKEN_TIMEOUT,
            )

            # Scopes are granted to the application in the Auth0 dashboard
            token_response = get_token.client_credentials(
                audience=self.config.audience,
            )

            if "access_token" not in token_response:
                raise AuthConfigError("Access token not found in Auth0 response")

            logger.info(
                "Successfully obtained management API token",
                extra={"operation": "token_request", "status": "success"},
            )

            return str(token_response["access_token"])

        except AuthConfigError:
            raise
        except Exception as e:
            logger.error(
                f"Failed to get management token: {e}",
                extra={"operation": "token_request", "error": str(e)},
                exc_info=True,
            )
            raise AuthConfigError(
                f"Failed to obtain Auth0 management token: {e}"
            ) from e

    def get_token(self) -> str:
        """Get the current management API token.

        Returns:
            str: Access token

        Raises:
            AuthConfigError: If the token cannot be obtained
        """
        if self._token is None:
            self._token = self._get_management_token()
        return self._token

    @staticmethod
    def clear_cache() -> None:
        """Clear the client cache. Useful for testing."""
        _client_cache.clear()
        logger.debug("Cleared Auth0 client cache")
