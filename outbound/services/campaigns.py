"""
Campaigns Service

Campaign CRUD, sender assignment, and sequence steps (v1.1 API).
"""

from typing import Any

from outbound.clients.base import RequestOptions
from outbound.clients.emailbison import get_client
from outbound.models import ListCampaignsRequest
from outbound.services.common import unwrap_data


async def list_campaigns(filters: ListCampaignsRequest | None = None) -> list[dict[str, Any]]:
    """Campaigns in the current workspace, optionally filtered by search text and status."""
    params = filters.to_params() if filters else {}
    response = await get_client().get("/api/campaigns", RequestOptions(params=params))
    return unwrap_data(response)


async def get_campaign(campaign_id: int | str) -> dict[str, Any]:
    response = await get_client().get(f"/api/campaigns/{campaign_id}")
    return unwrap_data(response)


async def get_campaign_sequence_steps(campaign_id: int | str) -> dict[str, Any]:
    response = await get_client().get(f"/api/campaigns/{campaign_id}/sequence-steps")
    return unwrap_data(response)


async def get_campaign_email_accounts(campaign_id: int | str) -> list[dict[str, Any]]:
    response = await get_client().get(f"/api/campaigns/{campaign_id}/sender-emails")
    return unwrap_data(response)


async def get_campaign_schedule(campaign_id: int | str) -> dict[str, Any]:
    response = await get_client().get(f"/api/campaigns/{campaign_id}/sending-schedule")
    return unwrap_data(response)


# =============================================================================
# Mutations
# =============================================================================


async def create_campaign(data: dict[str, Any]) -> dict[str, Any]:
    response = await get_client().post("/api/campaigns", data)
    return unwrap_data(response)


async def pause_campaign(campaign_id: int | str) -> dict[str, Any]:
    response = await get_client().patch(f"/api/campaigns/{campaign_id}/pause")
    return unwrap_data(response)


async def resume_campaign(campaign_id: int | str) -> dict[str, Any]:
    response = await get_client().patch(f"/api/campaigns/{campaign_id}/resume")
    return unwrap_data(response)


async def delete_campaign(campaign_id: int | str) -> dict[str, Any]:
    """Queue a campaign for deletion; the upstream processes it in the background."""
    response = await get_client().delete(f"/api/campaigns/{campaign_id}")
    return unwrap_data(response)


async def attach_sender_emails(campaign_id: int | str, sender_email_ids: list[int]) -> None:
    await get_client().post(
        f"/api/campaigns/{campaign_id}/attach-sender-emails",
        {"sender_email_ids": sender_email_ids},
    )


async def remove_sender_emails(campaign_id: int | str, sender_email_ids: list[int]) -> None:
    await get_client().delete(
        f"/api/campaigns/{campaign_id}/remove-sender-emails",
        body={"sender_email_ids": sender_email_ids},
    )


async def update_campaign_settings(campaign_id: int | str, settings: dict[str, Any]) -> dict[str, Any]:
    response = await get_client().patch(f"/api/campaigns/{campaign_id}/update", settings)
    return unwrap_data(response)


# =============================================================================
# Sequence steps (v1.1 API)
# =============================================================================


async def get_sequence_steps(campaign_id: int | str) -> dict[str, Any]:
    """Sequence id plus its ordered steps."""
    response = await get_client().get(f"/api/campaigns/v1.1/{campaign_id}/sequence-steps")
    return unwrap_data(response)


async def create_sequence_steps(campaign_id: int | str, data: dict[str, Any]) -> dict[str, Any]:
    response = await get_client().post(f"/api/campaigns/v1.1/{campaign_id}/sequence-steps", data)
    return unwrap_data(response)


async def update_sequence_steps(sequence_id: int | str, data: dict[str, Any]) -> dict[str, Any]:
    """Update existing steps; every step in ``data`` must carry its id."""
    response = await get_client().put(f"/api/campaigns/v1.1/sequence-steps/{sequence_id}", data)
    return unwrap_data(response)


async def delete_sequence_step(sequence_step_id: int | str) -> dict[str, Any]:
    response = await get_client().delete(f"/api/campaigns/sequence-steps/{sequence_step_id}")
    return unwrap_data(response)


async def send_test_email(
    sequence_step_id: int | str,
    sender_email_id: int,
    lead_id: int | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"sender_email_id": sender_email_id}
    if lead_id:
        payload["lead_id"] = lead_id
    response = await get_client().post(
        f"/api/campaigns/sequence-steps/{sequence_step_id}/test-email",
        payload,
    )
    return unwrap_data(response)
