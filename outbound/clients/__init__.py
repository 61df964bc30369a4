"""
HTTP clients for the upstream APIs.

EmailBison (authenticated, retrying) and HQ master data (public, single attempt)
share one request executor in ``base``.
"""

from .base import BaseApiClient, RequestContext, RequestOptions, build_url, compute_retry_delay
from .emailbison import EmailBisonClient, create_client, get_client, reset_client
from .hq_data import HQDataClient, HQDataError, create_hq_client, get_hq_client, reset_hq_client

__all__ = [
    "BaseApiClient",
    "EmailBisonClient",
    "HQDataClient",
    "HQDataError",
    "RequestContext",
    "RequestOptions",
    "build_url",
    "compute_retry_delay",
    "create_client",
    "create_hq_client",
    "get_client",
    "get_hq_client",
    "reset_client",
    "reset_hq_client",
]
