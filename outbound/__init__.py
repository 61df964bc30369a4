"""
Async API clients for the EmailBison outreach platform and HQ master data.

Usage:
    from outbound import get_client, NotFoundError
    from outbound.services import list_campaigns

    campaigns = await list_campaigns()
"""

from .clients import (
    EmailBisonClient,
    HQDataClient,
    HQDataError,
    RequestOptions,
    create_client,
    create_hq_client,
    get_client,
    get_hq_client,
    reset_client,
    reset_hq_client,
)
from .config import ClientConfig, ConfigurationError, HQClientConfig
from .errors import (
    AuthenticationError,
    EmailBisonError,
    ErrorCode,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
    http_error_from_response,
    is_emailbison_error,
    is_retryable_error,
)

__version__ = "1.0.0"

__all__ = [
    "AuthenticationError",
    "ClientConfig",
    "ConfigurationError",
    "EmailBisonClient",
    "EmailBisonError",
    "ErrorCode",
    "ForbiddenError",
    "HQClientConfig",
    "HQDataClient",
    "HQDataError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "RequestOptions",
    "RequestTimeoutError",
    "ServerError",
    "ValidationError",
    "create_client",
    "create_hq_client",
    "get_client",
    "get_hq_client",
    "http_error_from_response",
    "is_emailbison_error",
    "is_retryable_error",
    "reset_client",
    "reset_hq_client",
]
