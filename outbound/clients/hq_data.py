"""
HQ Master Data API Client

Client for the Revenue Infrastructure people/company views. The endpoints are
public: no authentication header and a single attempt per request.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any

import httpx

from outbound.clients.base import BaseApiClient
from outbound.config import HQClientConfig, HQDataSettings

logger = logging.getLogger(__name__)


class HQDataError(Exception):
    """Failure talking to the HQ data API.

    ``status_code`` is 0 for timeouts and transport failures.
    """

    def __init__(self, message: str, status_code: int, details: Any | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


def _nested_error_message(body: Mapping[str, Any]) -> str | None:
    # {"error": {"code": "NOT_FOUND", "message": "..."}}
    error = body.get("error")
    if isinstance(error, Mapping) and isinstance(error.get("message"), str):
        return error["message"]
    return None


def _top_level_message(body: Mapping[str, Any]) -> str | None:
    message = body.get("message")
    return message if isinstance(message, str) else None


_MESSAGE_STRATEGIES = (_nested_error_message, _top_level_message)


def extract_hq_error_message(body: Any, status_code: int) -> str:
    if isinstance(body, Mapping):
        for strategy in _MESSAGE_STRATEGIES:
            message = strategy(body)
            if message is not None:
                return message
    return f"HTTP {status_code}"


class HQDataClient(BaseApiClient):
    """Unauthenticated, single-attempt, read-only specialization of BaseApiClient."""

    log_prefix = "[HQ-Data]"
    error_class = HQDataError
    drop_empty_params = True

    def __init__(self, config: HQClientConfig | None = None, transport: httpx.AsyncBaseTransport | None = None):
        config = config or HQClientConfig()
        super().__init__(
            base_url=config.base_url,
            timeout_ms=config.timeout_ms,
            max_retries=1,
            debug=config.debug,
            transport=transport,
        )
        self.config = config

    def _error_from_response(self, status_code: int, body: Any) -> HQDataError:
        return HQDataError(extract_hq_error_message(body, status_code), status_code, body)

    def _timeout_error(self, timeout_ms: int | float) -> HQDataError:
        return HQDataError(f"Request timed out after {timeout_ms}ms", 0)

    def _network_error(self, exc: httpx.TransportError) -> HQDataError:
        return HQDataError(f"Network error: {exc}", 0)


def create_hq_client(
    config: HQClientConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HQDataClient:
    """Build an HQ data client, reading defaults from the environment when no config is given."""
    if config is None:
        config = HQDataSettings().to_client_config()
    return HQDataClient(config, transport=transport)


_default_client: HQDataClient | None = None
_client_lock = threading.Lock()


def get_hq_client(settings: HQDataSettings | None = None) -> HQDataClient:
    global _default_client
    if _default_client is None:
        with _client_lock:
            if _default_client is None:
                _default_client = create_hq_client(settings.to_client_config() if settings else None)
    return _default_client


def reset_hq_client() -> None:
    global _default_client
    with _client_lock:
        _default_client = None
