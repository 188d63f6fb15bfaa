from typing import Any

from ..utils.logging_utils import get_logger
from .auth0_client import Auth0ClientManager
from .config import get_env_config
from .exceptions import AuthConfigError

# Module logger
logger = get_logger(__name__)


def doctor(test_api: bool = False) -> dict[str, Any]:
    """Check that credentials work and optionally that the API answers.

    Args:
        test_api: Whether to make one read-only API call with the token

    Returns:
        Dict[str, Any]: Status information including success status and details
    """
    try:
        config = get_env_config()
        logger.info(
            f"Checking credentials for {config.domain}",
            extra={"operation": "doctor_check"},
        )

        manager = Auth0ClientManager(config)
        manager.get_token()

        result: dict[str, Any] = {
            "success": True,
            "domain": config.domain,
            "client_id": f"{config.client_id[:8]}...",
            "token_obtained": True,
            "api_tested": False,
            "details": "Credentials are working correctly",
        }

        if test_api:
            try:
                client = manager.get_client()
                client.users.list(per_page=1)
                result["api_tested"] = True
                result["api_status"] = "success"
                result["details"] = "Credentials and API access are working correctly"
            except Exception as api_error:
                logger.warning(
                    f"API access test failed: {api_error}",
                    extra={"operation": "api_test", "status": "failed"},
                )
                result["api_tested"] = True
                result["api_status"] = "failed"
                result["details"] = f"Token obtained but API access failed: {api_error}"

        return result

    except AuthConfigError as e:
        logger.error(
            f"Authentication configuration error: {e}",
            extra={"operation": "doctor_check", "error": str(e)},
        )
        return {
            "success": False,
            "token_obtained": False,
            "api_tested": False,
            "error": str(e),
            "details": "Authentication configuration is invalid",
        }
