"""Error types for the booking orders library."""

from typing import Optional

AUTH_REQUIRED_MESSAGE = "Authentication required. Please login again."
NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."

# Fallback text for HTTP failures whose body carries no message.
HTTP_STATUS_MESSAGES = {
    403: "Access denied. You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    429: "Too many requests. Please try again later.",
    500: "Server error. Please try again later.",
}


class ClientError(Exception):
    """Base class for client errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class AuthenticationError(ClientError):
    """The server rejected the request with HTTP 401."""

    def __init__(self, cause: Optional[Exception] = None):
        super().__init__(AUTH_REQUIRED_MESSAGE, cause)


class NetworkError(ClientError):
    """No response was received from the server."""

    def __init__(self, cause: Optional[Exception] = None):
        super().__init__(NETWORK_ERROR_MESSAGE, cause)


class HTTPError(ClientError):
    """Non-2xx HTTP response other than 401."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        if not message:
            message = HTTP_STATUS_MESSAGES.get(
                status_code,
                HTTP_STATUS_MESSAGES[500] if status_code >= 500 else f"Request failed with status {status_code}",
            )
        super().__init__(message)
        self.status_code = status_code

    def is_unauthorized(self) -> bool:
        """Return True if this is a 401 response."""
        return self.status_code == 401

    def is_not_found(self) -> bool:
        """Return True if this is a 404 response."""
        return self.status_code == 404

    def is_server_error(self) -> bool:
        """Return True for 5xx responses."""
        return self.status_code >= 500


class DomainError(ClientError):
    """The request succeeded at the transport level but the server reported failure."""


class InvalidArgumentError(ClientError):
    """Invalid argument provided by caller."""

    def __init__(self, message: str):
        super().__init__(f"invalid argument: {message}")
