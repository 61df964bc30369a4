"""
Replies Service (Master Inbox)

Reading, answering and triaging replies received on campaign threads.
"""

from typing import Any

from outbound.clients.base import RequestOptions
from outbound.clients.emailbison import get_client
from outbound.models import ListRepliesRequest
from outbound.services.common import unwrap_data


async def list_replies(filters: ListRepliesRequest | None = None) -> dict[str, Any]:
    """Paginated replies; returns the full envelope (``data``, ``meta``, ``links``)."""
    params = filters.to_params() if filters else {}
    return await get_client().get("/api/replies", RequestOptions(params=params))


async def get_reply(reply_id: int | str) -> dict[str, Any]:
    response = await get_client().get(f"/api/replies/{reply_id}")
    return unwrap_data(response)


async def delete_reply(reply_id: int | str) -> dict[str, Any]:
    response = await get_client().delete(f"/api/replies/{reply_id}")
    return unwrap_data(response)


async def get_conversation_thread(reply_id: int | str) -> list[dict[str, Any]]:
    response = await get_client().get(f"/api/replies/{reply_id}/conversation-thread")
    thread = unwrap_data(response) or {}
    return thread.get("messages", [])


async def send_reply(reply_id: int | str, payload: dict[str, Any]) -> dict[str, Any]:
    response = await get_client().post(f"/api/replies/{reply_id}/reply", payload)
    return unwrap_data(response)


async def compose_new_email(payload: dict[str, Any]) -> dict[str, Any]:
    """Send a new email outside any existing thread."""
    response = await get_client().post("/api/replies/new", payload)
    return unwrap_data(response)


async def forward_reply(reply_id: int | str, payload: dict[str, Any]) -> dict[str, Any]:
    response = await get_client().post(f"/api/replies/{reply_id}/forward", payload)
    return unwrap_data(response)


async def mark_as_interested(reply_id: int | str) -> dict[str, Any]:
    response = await get_client().patch(f"/api/replies/{reply_id}/mark-as-interested")
    return unwrap_data(response)


async def mark_as_not_interested(reply_id: int | str) -> dict[str, Any]:
    response = await get_client().patch(f"/api/replies/{reply_id}/mark-as-not-interested")
    return unwrap_data(response)


async def mark_as_read_or_unread(reply_id: int | str, read: bool) -> dict[str, Any]:
    response = await get_client().patch(
        f"/api/replies/{reply_id}/mark-as-read-or-unread",
        {"read": read},
    )
    return unwrap_data(response)


async def mark_as_automated_or_not(reply_id: int | str, automated: bool) -> dict[str, Any]:
    response = await get_client().patch(
        f"/api/replies/{reply_id}/mark-as-automated-or-not-automated",
        {"automated_reply": automated},
    )
    return unwrap_data(response)


async def unsubscribe_contact(reply_id: int | str) -> dict[str, Any]:
    response = await get_client().patch(f"/api/replies/{reply_id}/unsubscribe")
    return unwrap_data(response)


async def attach_scheduled_email(reply_id: int | str, payload: dict[str, Any]) -> dict[str, Any]:
    """Link an untracked reply to the scheduled email it answers."""
    response = await get_client().post(
        f"/api/replies/{reply_id}/attach-scheduled-email-to-reply",
        payload,
    )
    return unwrap_data(response)


async def push_to_followup_campaign(reply_id: int | str, payload: dict[str, Any]) -> dict[str, Any]:
    response = await get_client().post(f"/api/replies/{reply_id}/followup-campaign/push", payload)
    return unwrap_data(response)


async def get_replies_for_lead(lead_id: int | str) -> list[dict[str, Any]]:
    response = await get_client().get(f"/api/leads/{lead_id}/replies")
    return unwrap_data(response)
