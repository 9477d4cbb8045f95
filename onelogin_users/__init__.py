"""OneLogin users API client library.

Architecture:
- models.py: User and UserQuery with their JSON mapping
- client.py: Request descriptors, transport contract, requests-backed transport
- users.py: User operations (query, get, create, update, destroy, logout)
- exceptions.py: Typed exceptions for error handling
- config/: Settings loaded from environment and /run/secrets

Usage:
    from onelogin_users import RequestsTransport, User, UserClient

    users = UserClient(RequestsTransport(token), "https://api.us.onelogin.com")
    alice = users.create(User(username="alice", email="alice@example.com"))

    # One-off calls
    from onelogin_users import get_user

    alice = get_user("https://api.us.onelogin.com", token, 42)
"""
from .client import (
    RequestDescriptor,
    RequestsTransport,
    Transport,
    REQUEST_TIMEOUT,
)
from .config import ClientConfig, load_settings
from .exceptions import (
    OneLoginError,
    OneLoginAPIError,
    UserValidationError,
    UserDecodeError,
    ConfigurationError,
)
from .models import User, UserQuery
from .users import (
    UserClient,
    create_client_with_token,
    create_client_from_settings,
    query_users,
    get_user,
    create_user,
    update_user,
    destroy_user,
    logout_user,
)

__all__ = [
    # Transport
    "RequestDescriptor",
    "RequestsTransport",
    "Transport",
    "REQUEST_TIMEOUT",

    # Config
    "ClientConfig",
    "load_settings",

    # Exceptions
    "OneLoginError",
    "OneLoginAPIError",
    "UserValidationError",
    "UserDecodeError",
    "ConfigurationError",

    # Models
    "User",
    "UserQuery",

    # Client
    "UserClient",
    "create_client_with_token",
    "create_client_from_settings",

    # User functions
    "query_users",
    "get_user",
    "create_user",
    "update_user",
    "destroy_user",
    "logout_user",
]
