"""
Companies Service

Company firmographics from the HQ ``vw_companies`` view.
"""

from typing import Any

from outbound.clients.base import RequestOptions
from outbound.clients.hq_data import get_hq_client
from outbound.models import CompaniesFilters


async def search_companies(filters: CompaniesFilters | None = None) -> dict[str, Any]:
    """Returns ``{"data": [...], "pagination": {...}}``."""
    filters = filters or CompaniesFilters()
    return await get_hq_client().get("/api/views/companies", RequestOptions(params=filters.to_params()))


async def get_company_by_domain(domain: str) -> dict[str, Any] | None:
    result = await search_companies(CompaniesFilters(domain=domain, limit=1))
    companies = result.get("data") or []
    return companies[0] if companies else None
