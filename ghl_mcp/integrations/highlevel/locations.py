"""
Locations (sub-accounts) API.

Location CRUD and search, tags, task search, custom fields (including
file upload), custom values, templates and timezones.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore

DEFAULT_LOCATION_SEARCH_LIMIT = 10
DEFAULT_TEMPLATE_LIMIT = 25


class LocationsAPI(HighLevelCore):
    """Endpoints under /locations."""

    # =========================================================================
    # Locations
    # =========================================================================

    async def search_locations(
        self,
        *,
        company_id: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
        order: str | None = None,
        email: str | None = None,
    ) -> ApiResult[Any]:
        """GET /locations/search (skip 0, limit 10, order asc unless given)."""
        params = compact(
            {
                "skip": skip or 0,
                "limit": limit or DEFAULT_LOCATION_SEARCH_LIMIT,
                "order": order or "asc",
                "companyId": company_id,
                "email": email,
            }
        )
        return await self._call("GET", "/locations/search", params=params)

    async def get_location_by_id(self, location_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/locations/{location_id}")

    async def create_location(self, location: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/locations/", json=location)

    async def update_location(self, location_id: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/locations/{location_id}", json=updates)

    async def delete_location(
        self, location_id: str, delete_twilio_account: bool = False
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/locations/{location_id}",
            params={"deleteTwilioAccount": delete_twilio_account},
        )

    # =========================================================================
    # Tags
    # =========================================================================

    async def get_location_tags(self, location_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/locations/{location_id}/tags")

    async def create_location_tag(self, location_id: str, tag: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", f"/locations/{location_id}/tags", json=tag)

    async def get_location_tag(self, location_id: str, tag_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/locations/{location_id}/tags/{tag_id}")

    async def update_location_tag(
        self, location_id: str, tag_id: str, tag: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call("PUT", f"/locations/{location_id}/tags/{tag_id}", json=tag)

    async def delete_location_tag(self, location_id: str, tag_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/locations/{location_id}/tags/{tag_id}")

    # =========================================================================
    # Tasks
    # =========================================================================

    async def search_location_tasks(
        self, location_id: str, search: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/locations/{location_id}/tasks/search", json=compact(search)
        )

    # =========================================================================
    # Custom fields
    # =========================================================================

    async def get_location_custom_fields(
        self, location_id: str, model: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/locations/{location_id}/customFields", params=compact({"model": model})
        )

    async def create_location_custom_field(
        self, location_id: str, field: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call("POST", f"/locations/{location_id}/customFields", json=field)

    async def get_location_custom_field(self, location_id: str, field_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/locations/{location_id}/customFields/{field_id}")

    async def update_location_custom_field(
        self, location_id: str, field_id: str, field: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/locations/{location_id}/customFields/{field_id}", json=field
        )

    async def delete_location_custom_field(
        self, location_id: str, field_id: str
    ) -> ApiResult[Any]:
        return await self._call("DELETE", f"/locations/{location_id}/customFields/{field_id}")

    async def upload_location_custom_field_file(
        self, location_id: str, upload: dict[str, Any]
    ) -> ApiResult[Any]:
        """POST /locations/{id}/customFields/upload as multipart form data."""
        return await self._call(
            "POST",
            f"/locations/{location_id}/customFields/upload",
            files=self._form_fields(upload),
        )

    # =========================================================================
    # Custom values
    # =========================================================================

    async def get_location_custom_values(self, location_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/locations/{location_id}/customValues")

    async def create_location_custom_value(
        self, location_id: str, value: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call("POST", f"/locations/{location_id}/customValues", json=value)

    async def get_location_custom_value(self, location_id: str, value_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/locations/{location_id}/customValues/{value_id}")

    async def update_location_custom_value(
        self, location_id: str, value_id: str, value: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/locations/{location_id}/customValues/{value_id}", json=value
        )

    async def delete_location_custom_value(
        self, location_id: str, value_id: str
    ) -> ApiResult[Any]:
        return await self._call("DELETE", f"/locations/{location_id}/customValues/{value_id}")

    # =========================================================================
    # Templates and timezones
    # =========================================================================

    async def get_location_templates(
        self,
        location_id: str,
        origin_id: str,
        *,
        deleted: bool = False,
        skip: int | None = None,
        limit: int | None = None,
        template_type: str | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "originId": origin_id,
                "deleted": deleted,
                "skip": skip or 0,
                "limit": limit or DEFAULT_TEMPLATE_LIMIT,
                "type": template_type,
            }
        )
        return await self._call("GET", f"/locations/{location_id}/templates", params=params)

    async def delete_location_template(self, location_id: str, template_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/locations/{location_id}/templates/{template_id}")

    async def get_timezones(self, location_id: str | None = None) -> ApiResult[Any]:
        """GET /locations/{id}/timezones, or the global list without a location."""
        path = f"/locations/{location_id}/timezones" if location_id else "/locations/timezones"
        return await self._call("GET", path)
