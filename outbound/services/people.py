"""
People Service

Person profiles from the HQ ``vw_people`` view.
"""

from typing import Any

from outbound.clients.base import RequestOptions
from outbound.clients.hq_data import get_hq_client
from outbound.models import PeopleFilters


async def search_people(filters: PeopleFilters | None = None) -> dict[str, Any]:
    filters = filters or PeopleFilters()
    return await get_hq_client().get("/api/views/people", RequestOptions(params=filters.to_params()))
