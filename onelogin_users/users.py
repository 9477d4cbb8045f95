"""OneLogin users v2 operations."""
from __future__ import annotations
import json
import logging
from typing import Any, List, Optional

import requests

from .client import (
    AUTH_BEARER,
    JSON_HEADERS,
    REQUEST_TIMEOUT,
    RequestDescriptor,
    RequestsTransport,
    Transport,
)
from .config import ClientConfig, load_settings
from .exceptions import UserDecodeError, UserValidationError
from .models import User, UserQuery

logger = logging.getLogger(__name__)


def _check_id(user_id: Any) -> int:
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise UserValidationError(f"User id must be an integer, got {user_id!r}")
    return user_id


class UserClient:
    """Client for the users resource of the OneLogin API.

    All I/O goes through the injected transport; this class only builds
    request descriptors and decodes response bodies.

    Usage:
        users = UserClient(RequestsTransport(token), "https://api.us.onelogin.com")
        alice = users.create(User(username="alice", email="alice@example.com"))
        users.logout(alice.id)
    """

    def __init__(self, transport: Transport, host: str):
        """Initialize user client.

        Args:
            transport: Transport implementing read/create/update/destroy
            host: API base URL, e.g. https://api.us.onelogin.com
        """
        self.transport = transport
        self.host = host.rstrip("/")
        self.endpoint = f"{self.host}/api/2/users"

    def _request(self, url: str, payload: Any = None) -> RequestDescriptor:
        return RequestDescriptor(
            url=url,
            headers=dict(JSON_HEADERS),
            auth_method=AUTH_BEARER,
            payload=payload,
        )

    def _decode(self, url: str, body: bytes) -> Any:
        try:
            return json.loads(body)
        except (TypeError, ValueError) as e:
            logger.warning(f"Undecodable response from {url}: {e}")
            raise UserDecodeError(url, body, f"invalid JSON: {e}") from e

    def _decode_user(self, url: str, body: bytes) -> User:
        data = self._decode(url, body)
        try:
            return User.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Unexpected user representation from {url}: {e}")
            raise UserDecodeError(url, body, str(e)) from e

    def _merge_response(self, user: User, url: str, body: bytes) -> User:
        if not body or not body.strip():
            return user.merged({})
        data = self._decode(url, body)
        try:
            return user.merged(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Unexpected user representation from {url}: {e}")
            raise UserDecodeError(url, body, str(e)) from e

    def query(self, criteria: Optional[UserQuery] = None) -> List[User]:
        """Return the users matching the criteria; no criteria returns every user.

        Args:
            criteria: Optional filter sent as the request payload

        Returns:
            Users in the order the API returned them

        Raises:
            UserDecodeError: If the body is not a JSON array of users
        """
        payload = criteria.to_dict() if criteria is not None else None
        logger.debug(f"GET {self.endpoint} | criteria={payload}")
        body = self.transport.read(self._request(self.endpoint, payload))

        data = self._decode(self.endpoint, body)
        if not isinstance(data, list):
            logger.warning(f"Expected a user list from {self.endpoint}, got {type(data).__name__}")
            raise UserDecodeError(self.endpoint, body, f"expected array, got {type(data).__name__}")
        try:
            return [User.from_dict(item) for item in data]
        except (TypeError, ValueError) as e:
            logger.warning(f"Unexpected user representation from {self.endpoint}: {e}")
            raise UserDecodeError(self.endpoint, body, str(e)) from e

    def get_one(self, user_id: int) -> User:
        """Return the user with the given id.

        Raises:
            UserValidationError: If user_id is not an integer
            UserDecodeError: If the body is not a JSON user object
        """
        url = f"{self.endpoint}/{_check_id(user_id)}"
        logger.debug(f"GET {url}")
        body = self.transport.read(self._request(url))
        return self._decode_user(url, body)

    def create(self, user: User) -> User:
        """Create the user in OneLogin.

        Args:
            user: User without an id

        Returns:
            A new User holding the submitted fields plus every field the
            API assigned (id, timestamps, ...). The argument is not modified.
        """
        logger.debug(f"POST {self.endpoint} | username={user.username}")
        body = self.transport.create(self._request(self.endpoint, user.to_dict()))
        return self._merge_response(user, self.endpoint, body)

    def update(self, user: User) -> User:
        """Update the user identified by ``user.id``.

        Returns:
            A new User merged with the API response. The argument is not modified.

        Raises:
            UserValidationError: If the user has no id; no request is sent
        """
        if user.id is None:
            raise UserValidationError("No ID Given")
        url = f"{self.endpoint}/{_check_id(user.id)}"
        logger.debug(f"PUT {url}")
        body = self.transport.update(self._request(url, user.to_dict()))
        return self._merge_response(user, url, body)

    def destroy(self, user_id: int) -> None:
        """Delete the user with the given id. Transport errors propagate."""
        url = f"{self.endpoint}/{_check_id(user_id)}"
        logger.debug(f"DELETE {url}")
        self.transport.destroy(self._request(url))

    def logout(self, user_id: int) -> None:
        """End every OneLogin session of the user.

        This endpoint only exists in the v1 API.
        """
        url = f"{self.host}/api/1/users/{_check_id(user_id)}/logout"
        logger.debug(f"PUT {url}")
        self.transport.update(self._request(url))


def create_client_with_token(
    host: str,
    token: str,
    timeout: float = REQUEST_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> UserClient:
    """Create a UserClient over a RequestsTransport using a pre-obtained token.

    Args:
        host: API base URL
        token: Access token sent as bearer credentials
        timeout: Per-request timeout in seconds
        session: Optional shared requests session

    Returns:
        UserClient instance
    """
    return UserClient(RequestsTransport(token, timeout=timeout, session=session), host)


def create_client_from_settings(config: Optional[ClientConfig] = None) -> UserClient:
    """Create a UserClient from ClientConfig, loading settings when none is given."""
    config = config or load_settings()
    return create_client_with_token(config.host, config.access_token, timeout=config.timeout)


# ─────────────────────────────────────────────────────────────────────────────
# Standalone functions for one-off calls
# ─────────────────────────────────────────────────────────────────────────────
def query_users(host: str, token: str, criteria: Optional[UserQuery] = None) -> List[User]:
    """Return the users matching criteria (all users when criteria is None)."""
    return create_client_with_token(host, token).query(criteria)


def get_user(host: str, token: str, user_id: int) -> User:
    """Return the user with the given id."""
    return create_client_with_token(host, token).get_one(user_id)


def create_user(host: str, token: str, user: User) -> User:
    """Create a user and return it with server-assigned fields."""
    return create_client_with_token(host, token).create(user)


def update_user(host: str, token: str, user: User) -> User:
    """Update a user and return the merged result."""
    return create_client_with_token(host, token).update(user)


def destroy_user(host: str, token: str, user_id: int) -> None:
    """Delete the user with the given id."""
    create_client_with_token(host, token).destroy(user_id)


def logout_user(host: str, token: str, user_id: int) -> None:
    """Log the user out of every OneLogin session."""
    create_client_with_token(host, token).logout(user_id)
