"""
Email Accounts Service

Sender email accounts (IMAP/SMTP and connected mailboxes).
"""

from typing import Any

from outbound.clients.emailbison import get_client
from outbound.services.common import unwrap_data


async def list_email_accounts() -> list[dict[str, Any]]:
    response = await get_client().get("/api/sender-emails")
    return unwrap_data(response)


async def get_email_account(email_account_id: int | str) -> dict[str, Any]:
    response = await get_client().get(f"/api/sender-emails/{email_account_id}")
    return unwrap_data(response)


async def get_email_account_campaigns(email_account_id: int | str) -> list[dict[str, Any]]:
    """Campaigns that send from this account."""
    response = await get_client().get(f"/api/sender-emails/{email_account_id}/campaigns")
    return unwrap_data(response)


async def create_email_account(data: dict[str, Any]) -> dict[str, Any]:
    """Create an IMAP/SMTP sender account."""
    response = await get_client().post("/api/sender-emails/imap-smtp", data)
    return unwrap_data(response)
