"""
EmailBison HTTP Client

Authenticated client for the EmailBison API:
- Bearer token injection
- Configurable per-attempt timeouts
- Retry with exponential backoff for network, timeout, rate-limit and 5xx failures
- Failures normalized to the EmailBisonError hierarchy
"""

import logging
import threading
from typing import Any

import httpx

from outbound.clients.base import BaseApiClient, RequestOptions
from outbound.config import ClientConfig, ConfigurationError, EmailBisonSettings
from outbound.errors import (
    EmailBisonError,
    NetworkError,
    RequestTimeoutError,
    http_error_from_response,
    is_retryable_error,
)
from outbound.logging.safe_logging import token_presence

logger = logging.getLogger(__name__)


class EmailBisonClient(BaseApiClient):
    """
    Async client for the EmailBison REST API.

    Usage:
        client = create_client(ClientConfig(api_key="..."))
        campaigns = await client.get("/api/campaigns", RequestOptions(params={"status": "active"}))
        await client.patch("/api/campaigns/42/pause")
    """

    log_prefix = "[EmailBison]"
    error_class = EmailBisonError

    def __init__(self, config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(
            base_url=config.base_url,
            timeout_ms=config.timeout_ms,
            max_retries=config.max_retries,
            debug=config.debug,
            transport=transport,
        )
        self.config = config

    def _default_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    def _error_from_response(self, status_code: int, body: Any) -> EmailBisonError:
        return http_error_from_response(status_code, body)

    def _timeout_error(self, timeout_ms: int | float) -> EmailBisonError:
        return RequestTimeoutError(timeout_ms)

    def _network_error(self, exc: httpx.TransportError) -> EmailBisonError:
        return NetworkError(str(exc) or "Network request failed")

    def _is_retryable(self, error: Exception) -> bool:
        return is_retryable_error(error)

    async def post(self, path: str, body: Any = None, options: RequestOptions | None = None) -> Any:
        return await self.request("POST", path, body, options)

    async def put(self, path: str, body: Any = None, options: RequestOptions | None = None) -> Any:
        return await self.request("PUT", path, body, options)

    async def patch(self, path: str, body: Any = None, options: RequestOptions | None = None) -> Any:
        return await self.request("PATCH", path, body, options)

    async def delete(self, path: str, options: RequestOptions | None = None, body: Any = None) -> Any:
        """DELETE, optionally with a JSON body (bulk detach endpoints take one)."""
        return await self.request("DELETE", path, body, options)


def create_client(config: ClientConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> EmailBisonClient:
    """Build a configured EmailBison client.

    Args:
        config: Client configuration. ``api_key`` is required.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).

    Raises:
        ConfigurationError: If no API key was supplied.
    """
    if not config.api_key:
        raise ConfigurationError("EmailBison API key is required")

    logger.debug(
        "EmailBisonClient created: base_url=%s, timeout=%sms, max_retries=%d, %s",
        config.base_url,
        config.timeout_ms,
        config.max_retries,
        token_presence("api_key", config.api_key),
    )
    return EmailBisonClient(config, transport=transport)


# Singleton instance for the process
_default_client: EmailBisonClient | None = None
_client_lock = threading.Lock()


def get_client(settings: EmailBisonSettings | None = None) -> EmailBisonClient:
    """
    Get or create the process-wide EmailBison client.

    ``settings`` is only used when the client is first built; it defaults to
    a fresh ``EmailBisonSettings()`` read from the environment.

    Configuration comes from the environment:
    - EMAILBISON_API_KEY (required)
    - EMAILBISON_BASE_URL (optional, defaults to app.outboundsolutions.com)
    - EMAILBISON_ENV / APP_ENV (debug logging outside production)

    Raises:
        ConfigurationError: If EMAILBISON_API_KEY is not set.
    """
    global _default_client
    if _default_client is None:
        with _client_lock:
            if _default_client is None:
                _default_client = create_client((settings or EmailBisonSettings()).to_client_config())
    return _default_client


def reset_client() -> None:
    """Drop the cached client so the next get_client() rebuilds it."""
    global _default_client
    with _client_lock:
        _default_client = None
