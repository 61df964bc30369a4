"""
Account Service

The authenticated user's account and current workspace context.
"""

from typing import Any

from outbound.clients.emailbison import get_client
from outbound.services.common import unwrap_data


async def get_account() -> dict[str, Any]:
    """Current user, including the active workspace."""
    response = await get_client().get("/api/users")
    return unwrap_data(response)
