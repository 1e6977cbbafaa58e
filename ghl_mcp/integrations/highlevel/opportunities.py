"""
Opportunities API.

Search (snake_case query names, as the remote API expects), pipelines,
CRUD, status, upsert and followers.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ghl_mcp.integrations.base import ApiResult
from ghl_mcp.integrations.highlevel.core import HighLevelCore

logger = logging.getLogger(__name__)

# Optional search filters, sent only when truthy
_SEARCH_FILTERS = (
    "pipeline_id",
    "pipeline_stage_id",
    "contact_id",
    "status",
    "assigned_to",
    "campaignId",
    "id",
    "order",
    "endDate",
    "startAfter",
    "startAfterId",
    "date",
    "country",
    "page",
    "limit",
)

# Optional expansion flags, sent whenever set (False included)
_SEARCH_FLAGS = ("getTasks", "getNotes", "getCalendarEvents")


class OpportunitiesAPI(HighLevelCore):
    """Endpoints under /opportunities."""

    async def search_opportunities(self, search: dict[str, Any] | None = None) -> ApiResult[Any]:
        """
        GET /opportunities/search.

        Args:
            search: Query using the remote names (``location_id``, ``q``,
                ``pipeline_id``, ``status``, ``limit``, ...)

        Returns:
            ApiResult with ``{"opportunities": [...], "meta": {...}}``
        """
        search = search or {}
        params: dict[str, Any] = {"location_id": search.get("location_id") or self.location_id}

        query = search.get("q")
        if isinstance(query, str) and query.strip():
            params["q"] = query.strip()
        for key in _SEARCH_FILTERS:
            if search.get(key):
                params[key] = search[key]
        for key in _SEARCH_FLAGS:
            if search.get(key) is not None:
                params[key] = "true" if search[key] else "false"

        logger.debug(f"[{self.name}] Search opportunities params: {json.dumps(params)}")

        return await self._call("GET", "/opportunities/search", params=params)

    async def get_pipelines(self, location_id: str | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", "/opportunities/pipelines", params={"locationId": self._loc(location_id)}
        )

    async def get_opportunity(self, opportunity_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/opportunities/{opportunity_id}", unwrap="opportunity")

    async def create_opportunity(self, opportunity: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/opportunities/",
            json=self._with_location(opportunity),
            unwrap="opportunity",
        )

    async def update_opportunity(
        self, opportunity_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/opportunities/{opportunity_id}", json=updates, unwrap="opportunity"
        )

    async def update_opportunity_status(self, opportunity_id: str, status: str) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/opportunities/{opportunity_id}/status", json={"status": status}
        )

    async def upsert_opportunity(self, opportunity: dict[str, Any]) -> ApiResult[Any]:
        """POST /opportunities/upsert (returns ``{"opportunity": ..., "new": bool}``)."""
        return await self._call(
            "POST", "/opportunities/upsert", json=self._with_location(opportunity)
        )

    async def delete_opportunity(self, opportunity_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/opportunities/{opportunity_id}")

    async def add_opportunity_followers(
        self, opportunity_id: str, followers: list[str]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/opportunities/{opportunity_id}/followers", json={"followers": followers}
        )

    async def remove_opportunity_followers(
        self, opportunity_id: str, followers: list[str]
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/opportunities/{opportunity_id}/followers", json={"followers": followers}
        )
