"""
Workspaces Service
"""

from typing import Any

from outbound.clients.emailbison import get_client
from outbound.services.common import unwrap_data


async def list_workspaces() -> list[dict[str, Any]]:
    response = await get_client().get("/api/workspaces")
    return unwrap_data(response)


async def get_workspace(workspace_id: int) -> dict[str, Any]:
    response = await get_client().get(f"/api/workspaces/{workspace_id}")
    return unwrap_data(response)


async def switch_workspace(workspace_id: int) -> dict[str, Any]:
    """Switch the API key's active workspace; later calls operate within it."""
    response = await get_client().post(
        "/api/workspaces/v1.1/switch-workspace",
        {"team_id": workspace_id},
    )
    return unwrap_data(response)
