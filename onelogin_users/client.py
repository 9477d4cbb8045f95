"""Transport layer between UserClient and the OneLogin API.

Defines the request descriptor passed to a transport, the transport
contract itself, and a requests-backed implementation that attaches a
pre-obtained bearer token.
"""
from __future__ import annotations
import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import requests

from .exceptions import OneLoginAPIError, OneLoginError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 5

AUTH_BEARER = "bearer"
JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything a transport needs for one HTTP exchange.

    Attributes:
        url: Absolute target URL
        headers: Extra request headers
        auth_method: Authentication tag the transport must honour (e.g. "bearer")
        payload: JSON-ready body, or query parameters for reads
    """
    url: str
    headers: Dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))
    auth_method: Optional[str] = AUTH_BEARER
    payload: Optional[Any] = None


@runtime_checkable
class Transport(Protocol):
    """Capability interface used by UserClient for all I/O.

    Each operation returns the raw response body, or raises on
    transport-level failure.
    """

    def read(self, request: RequestDescriptor) -> bytes: ...
    def create(self, request: RequestDescriptor) -> bytes: ...
    def update(self, request: RequestDescriptor) -> bytes: ...
    def destroy(self, request: RequestDescriptor) -> bytes: ...


def token_fingerprint(token: str) -> str:
    """Return a short SHA256 digest of a token, safe to log."""
    return hashlib.sha256(token.encode()).hexdigest()[:12]


class RequestsTransport:
    """Transport executing requests with the ``requests`` library.

    The access token is used as-is: acquiring and refreshing it is the
    caller's responsibility.

    Usage:
        transport = RequestsTransport("access-token")
        body = transport.read(RequestDescriptor(url="https://api.us.onelogin.com/api/2/users"))
    """

    def __init__(
        self,
        access_token: str,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize transport.

        Args:
            access_token: Bearer token attached to "bearer" requests
            timeout: Per-request timeout in seconds
            session: Optional session to reuse connections across calls
        """
        self._access_token = access_token
        self.timeout = timeout
        self._session = session
        logger.debug(f"Transport ready | token_hash={token_fingerprint(access_token)} | timeout={timeout}")

    def read(self, request: RequestDescriptor) -> bytes:
        """Execute GET; the payload, if any, is sent as query parameters."""
        return self._send("GET", request)

    def create(self, request: RequestDescriptor) -> bytes:
        """Execute POST with the payload as JSON body."""
        return self._send("POST", request)

    def update(self, request: RequestDescriptor) -> bytes:
        """Execute PUT with the payload as JSON body."""
        return self._send("PUT", request)

    def destroy(self, request: RequestDescriptor) -> bytes:
        """Execute DELETE."""
        return self._send("DELETE", request)

    def _headers(self, request: RequestDescriptor) -> Dict[str, str]:
        headers = dict(request.headers)
        if request.auth_method == AUTH_BEARER:
            headers["Authorization"] = f"Bearer {self._access_token}"
        elif request.auth_method is not None:
            raise OneLoginError(f"Unsupported auth method: {request.auth_method}")
        return headers

    def _send(self, method: str, request: RequestDescriptor) -> bytes:
        kwargs: Dict[str, Any] = {
            "headers": self._headers(request),
            "timeout": self.timeout,
        }
        if request.payload is not None:
            if method == "GET":
                kwargs["params"] = request.payload
            else:
                kwargs["json"] = request.payload

        http = self._session if self._session is not None else requests
        resp = http.request(method, request.url, **kwargs)
        self._handle_error(resp)
        return resp.content

    def _handle_error(self, resp: requests.Response) -> None:
        """Centralized error handling for HTTP responses.

        Args:
            resp: Response object to check

        Raises:
            OneLoginAPIError: If response status indicates error
        """
        if resp.status_code >= 400:
            raise OneLoginAPIError(resp.status_code, resp.text, resp.url)
