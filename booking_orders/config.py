"""Client configuration loaded from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidArgumentError

ENV_PRODUCTION = "production"
ENV_STAGING = "staging"
ENV_LOCAL = "local"

DEFAULT_BASE_URLS = {
    ENV_PRODUCTION: "https://app.eassylife.in",
    ENV_STAGING: "https://dev.eassylife.in",
    ENV_LOCAL: "https://dev.eassylife.in",
}

API_PREFIX = "/api/"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_PAGE_LIMIT = 10


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the bookings API."""

    base_url: str = DEFAULT_BASE_URLS[ENV_LOCAL]
    timeout_seconds: float = DEFAULT_TIMEOUT_MS / 1000
    api_token: Optional[str] = None
    page_limit: int = DEFAULT_PAGE_LIMIT
    environment: str = ENV_LOCAL

    @property
    def api_url(self) -> str:
        """Base URL with the API prefix, always ending in a slash."""
        return self.base_url.rstrip("/") + API_PREFIX

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from ORDERS_* environment variables.

        Environment variables:
            ORDERS_ENV: "production", "staging" or "local" (default)
            ORDERS_API_BASE_URL: overrides the per-environment base URL
            ORDERS_API_TIMEOUT_MS: request timeout in milliseconds (default 30000)
            ORDERS_API_TOKEN: value for the api-token header
            ORDERS_PAGE_LIMIT: page size for status listings (default 10)
        """
        environment = os.environ.get("ORDERS_ENV", ENV_LOCAL).lower()
        if environment not in DEFAULT_BASE_URLS:
            raise InvalidArgumentError(f"unknown environment '{environment}'")

        base_url = os.environ.get("ORDERS_API_BASE_URL") or DEFAULT_BASE_URLS[environment]
        timeout_ms = _int_from_env("ORDERS_API_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)
        page_limit = _int_from_env("ORDERS_PAGE_LIMIT", DEFAULT_PAGE_LIMIT)

        return cls(
            base_url=base_url,
            timeout_seconds=timeout_ms / 1000,
            api_token=os.environ.get("ORDERS_API_TOKEN") or None,
            page_limit=page_limit,
            environment=environment,
        )


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidArgumentError(f"{name} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")
    return value
