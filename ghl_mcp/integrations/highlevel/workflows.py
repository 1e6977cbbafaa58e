"""Workflows and surveys APIs."""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class WorkflowsAPI(HighLevelCore):
    """Endpoints under /workflows and /surveys."""

    async def get_workflows(self, location_id: str | None = None) -> ApiResult[Any]:
        """GET /workflows/ (returns ``{"workflows": [...]}``)."""
        return await self._call(
            "GET", "/workflows/", params={"locationId": self._loc(location_id)}
        )

    async def get_surveys(
        self,
        *,
        location_id: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
        survey_type: str | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "locationId": self._loc(location_id),
                "skip": skip,
                "limit": limit,
                "type": survey_type,
            }
        )
        return await self._call("GET", "/surveys/", params=params)

    async def get_survey_submissions(
        self,
        *,
        location_id: str | None = None,
        page: int | None = None,
        limit: int | None = None,
        survey_id: str | None = None,
        q: str | None = None,
        start_at: str | None = None,
        end_at: str | None = None,
    ) -> ApiResult[Any]:
        # page/limit of 0 mean "unset" for this endpoint
        params = compact(
            {
                "page": page or None,
                "limit": limit or None,
                "surveyId": survey_id,
                "q": q,
                "startAt": start_at,
                "endAt": end_at,
            }
        )
        return await self._call(
            "GET", f"/locations/{self._loc(location_id)}/surveys/submissions", params=params
        )
