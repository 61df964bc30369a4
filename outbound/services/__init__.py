"""
Service functions organized by domain.

Each function calls the process-wide client and unwraps the response envelope.
"""

from .account import get_account
from .campaigns import (
    attach_sender_emails,
    create_campaign,
    create_sequence_steps,
    delete_campaign,
    delete_sequence_step,
    get_campaign,
    get_campaign_email_accounts,
    get_campaign_schedule,
    get_campaign_sequence_steps,
    get_sequence_steps,
    list_campaigns,
    pause_campaign,
    remove_sender_emails,
    resume_campaign,
    send_test_email,
    update_campaign_settings,
    update_sequence_steps,
)
from .companies import get_company_by_domain, search_companies
from .email_accounts import create_email_account, get_email_account, get_email_account_campaigns, list_email_accounts
from .people import search_people
from .replies import (
    attach_scheduled_email,
    compose_new_email,
    delete_reply,
    forward_reply,
    get_conversation_thread,
    get_replies_for_lead,
    get_reply,
    list_replies,
    mark_as_automated_or_not,
    mark_as_interested,
    mark_as_not_interested,
    mark_as_read_or_unread,
    push_to_followup_campaign,
    send_reply,
    unsubscribe_contact,
)
from .workspaces import get_workspace, list_workspaces, switch_workspace

__all__ = [
    "attach_scheduled_email",
    "attach_sender_emails",
    "compose_new_email",
    "create_campaign",
    "create_email_account",
    "create_sequence_steps",
    "delete_campaign",
    "delete_reply",
    "delete_sequence_step",
    "forward_reply",
    "get_account",
    "get_campaign",
    "get_campaign_email_accounts",
    "get_campaign_schedule",
    "get_campaign_sequence_steps",
    "get_company_by_domain",
    "get_conversation_thread",
    "get_email_account",
    "get_email_account_campaigns",
    "get_replies_for_lead",
    "get_reply",
    "get_sequence_steps",
    "get_workspace",
    "list_campaigns",
    "list_email_accounts",
    "list_replies",
    "list_workspaces",
    "mark_as_automated_or_not",
    "mark_as_interested",
    "mark_as_not_interested",
    "mark_as_read_or_unread",
    "pause_campaign",
    "push_to_followup_campaign",
    "remove_sender_emails",
    "resume_campaign",
    "search_companies",
    "search_people",
    "send_reply",
    "send_test_email",
    "switch_workspace",
    "unsubscribe_contact",
    "update_campaign_settings",
    "update_sequence_steps",
]
