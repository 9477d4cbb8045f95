"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..client import REQUEST_TIMEOUT, token_fingerprint
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us"


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """Return a secret from the /run/secrets mount, falling back to env_var.

    Blank files and unset variables count as missing (None).
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as e:
            logger.warning(f"Failed to read /run/secrets/{secret_name}: {e}")
        else:
            if secret_value:
                logger.info(f"Loaded {secret_name} from /run/secrets")
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info(f"Loaded {env_var} from environment (fallback)")
            return secret_value

    return None


def host_for_region(region: str) -> str:
    """Return the API host of a OneLogin region (e.g. "us", "eu")."""
    return f"https://api.{region.strip().lower()}.onelogin.com"


@dataclass
class ClientConfig:
    """Connection settings for the OneLogin users client."""
    host: str
    access_token: str
    timeout: float = REQUEST_TIMEOUT


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"ONELOGIN_TIMEOUT must be a number, got {raw!r}") from None
    if timeout <= 0:
        raise ConfigurationError(f"ONELOGIN_TIMEOUT must be positive, got {raw!r}")
    return timeout


def load_settings(
    host: Optional[str] = None,
    region: Optional[str] = None,
    access_token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> ClientConfig:
    """Load client settings from environment and /run/secrets.

    Explicit arguments win over the environment. For the host the order is
    host, region, ONELOGIN_URL, then ONELOGIN_REGION (default "us").

    Raises:
        ConfigurationError: If no access token is available or the timeout is invalid
    """
    if not host:
        if region and region.strip():
            host = host_for_region(region)
        else:
            env_region = os.environ.get("ONELOGIN_REGION", "").strip() or DEFAULT_REGION
            host = os.environ.get("ONELOGIN_URL", "").strip() or host_for_region(env_region)

    access_token = access_token or _load_secret_from_file("onelogin_access_token", "ONELOGIN_ACCESS_TOKEN")
    if not access_token:
        raise ConfigurationError(
            "ONELOGIN_ACCESS_TOKEN not found in /run/secrets or environment"
        )

    if timeout is None:
        raw_timeout = os.environ.get("ONELOGIN_TIMEOUT")
        timeout = _parse_timeout(raw_timeout) if raw_timeout else REQUEST_TIMEOUT
    elif timeout <= 0:
        raise ConfigurationError(f"timeout must be positive, got {timeout!r}")

    logger.info(f"host={host}; timeout={timeout}; token_hash={token_fingerprint(access_token)}")

    return ClientConfig(
        host=host.rstrip("/"),
        access_token=access_token,
        timeout=timeout,
    )
