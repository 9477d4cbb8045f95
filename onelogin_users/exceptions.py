"""OneLogin-specific exceptions for error handling."""


class OneLoginError(Exception):
    """Base exception for all OneLogin users operations."""
    pass


class OneLoginAPIError(OneLoginError):
    """HTTP error from the OneLogin API.
    
    Attributes:
        status_code: HTTP status code
        message: Error message from response
        endpoint: API endpoint that failed
    """
    
    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")


class UserValidationError(OneLoginError, ValueError):
    """Request rejected locally before reaching the API (e.g. missing user id)."""
    pass


class UserDecodeError(OneLoginError):
    """Response body could not be decoded into users.
    
    Attributes:
        endpoint: API endpoint that returned the body
        body: Raw response body
    """
    
    def __init__(self, endpoint: str, body: bytes, reason: str):
        self.endpoint = endpoint
        self.body = body
        self.reason = reason
        super().__init__(f"{endpoint}: {reason}")


class ConfigurationError(OneLoginError):
    """Client settings are missing or invalid."""
    pass
