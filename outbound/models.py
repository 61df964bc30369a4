"""
Request and filter models for the service layer.

Only the fields the services turn into query parameters or request bodies are
modelled here; response payloads stay plain JSON.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

CampaignStatusFilter = Literal[
    "draft",
    "launching",
    "active",
    "stopped",
    "completed",
    "paused",
    "failed",
    "queued",
    "archived",
    "pending deletion",
    "deleted",
]

ReplyStatus = Literal["unread", "read", "replied", "archived"]


class QueryModel(BaseModel):
    """Base for filter models that become query parameters."""

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ListCampaignsRequest(QueryModel):
    search: str | None = None
    status: CampaignStatusFilter | None = None


class ListRepliesRequest(QueryModel):
    page: int | None = None
    per_page: int | None = None
    search: str | None = None
    status: ReplyStatus | None = None
    folder: str | None = None
    read: bool | None = None
    campaign_id: int | None = None
    sender_email_id: int | None = None
    lead_id: int | None = None


class PeopleFilters(QueryModel):
    limit: int = 50
    offset: int = 0
    name: str | None = None
    job_title: str | None = None
    company_name: str | None = None
    company_domain: str | None = None
    industry: str | None = None
    size_range: str | None = None
    location: str | None = None
    country: str | None = None


class CompaniesFilters(QueryModel):
    limit: int = 50
    offset: int = 0
    name: str | None = None
    domain: str | None = None
    industry: str | None = None
    size_range: str | None = None
    country: str | None = None
    min_employees: int | None = None
    max_employees: int | None = None
    founded_after: int | None = None
    founded_before: int | None = None
