"""Custom exception hierarchy for BrandPy."""


class BrandError(Exception):
    """Base exception for BrandPy.

    This is the root exception class for all BrandPy-specific errors.
    All other custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: The main error message
            details: Optional additional details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class AuthConfigError(BrandError):
    """Authentication configuration errors.

    Raised when credentials are missing or invalid, or when a management
    token cannot be obtained.
    """


class UserOperationError(BrandError):
    """User operation errors.

    Raised when a directory mutation fails, such as disabling, deleting,
    updating or creating a user.
    """

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        """Initialize the user operation error.

        Args:
            message: The main error message
            user_id: The user ID that caused the error
            operation: The operation that failed (delete, disable, etc.)
            details: Optional additional details about the error
        """
        self.user_id = user_id
        self.operation = operation
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with user context."""
        parts = [self.message]

        if self.operation:
            parts.append(f"Operation: {self.operation}")

        if self.user_id:
            parts.append(f"User ID: {self.user_id}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class UserNotFoundError(UserOperationError):
    """The directory has no record for the requested user."""


class ResolutionError(BrandError):
    """An identifier could not be turned into a directory user ID."""

    def __init__(
        self,
        message: str,
        identifier: str | None = None,
        candidates: list[str] | None = None,
    ):
        """Initialize the resolution error.

        Args:
            message: The main error message
            identifier: The operator-supplied identifier
            candidates: User IDs matching the identifier when it was ambiguous
        """
        self.identifier = identifier
        self.candidates = candidates or []
        details = ", ".join(self.candidates) if self.candidates else None
        super().__init__(message, details)


class APIError(BrandError):
    """Management API errors.

    Raised when API calls fail due to invalid requests or server errors.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        details: str | None = None,
    ):
        """Initialize the API error.

        Args:
            message: The main error message
            status_code: The HTTP status code from the API response
            endpoint: The API endpoint that failed
            details: Optional additional details about the error
        """
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with API context."""
        parts = [self.message]

        if self.status_code:
            parts.append(f"Status: {self.status_code}")

        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class RateLimitError(APIError):
    """Rate limiting errors from the Management API."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
        endpoint: str | None = None,
        details: str | None = None,
    ):
        self.retry_after = retry_after
        super().__init__(
            message=message,
            status_code=429,
            endpoint=endpoint,
            details=details,
        )

    def _format_message(self) -> str:
        msg = super()._format_message()
        if self.retry_after:
            msg += f" | Retry after: {self.retry_after}s"
        return msg


class ValidationError(BrandError):
    """Input validation errors.

    Raised when operator input cannot be used, such as a non-positive
    fake user count or an unknown locale.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        details: str | None = None,
    ):
        """Initialize the validation error.

        Args:
            message: The main error message
            field: The field that failed validation
            value: The invalid value
            details: Optional additional details about the error
        """
        self.field = field
        self.value = value
        super().__init__(message, details)

    def _format_message(self) -> str:
        parts = [self.message]

        if self.field:
            parts.append(f"Field: {self.field}")

        if self.value:
            parts.append(f"Value: {self.value}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


def wrap_sdk_exception(exc: Exception, operation: str | None = None) -> BrandError:
    """Wrap Auth0 SDK exceptions into the BrandPy exception hierarchy.

    Args:
        exc: The original exception from the Auth0 SDK
        operation: Optional operation context

    Returns:
        BrandError: Wrapped exception
    """
    from auth0.exceptions import Auth0Error

    if isinstance(exc, BrandError):
        return exc

    if isinstance(exc, Auth0Error):
        error_code = exc.status_code
        error_msg = exc.message

        if error_code == 429:
            return RateLimitError(
                message=error_msg,
                details=f"Operation: {operation}" if operation else None,
            )

        if error_code in (401, 403):
            return AuthConfigError(
                message=f"Authentication failed: {error_msg}",
                details=f"Status: {error_code}",
            )

        if error_code == 404:
            return UserNotFoundError(
                message=f"Resource not found: {error_msg}",
                operation=operation,
                details=f"Status: {error_code}",
            )

        return APIError(
            message=error_msg,
            status_code=error_code,
            details=f"Operation: {operation}" if operation else None,
        )

    return BrandError(
        message=f"Unexpected error: {str(exc)}",
        details=f"Operation: {operation}, Type: {type(exc).__name__}"
        if operation
        else f"Type: {type(exc).__name__}",
    )
