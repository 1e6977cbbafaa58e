"""
Contacts API (version 2021-07-28).

Contact CRUD, search, tags, tasks, notes, followers, campaign and
workflow enrollment.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ghl_mcp.integrations.base import ApiResult, ErrorPolicy, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore

logger = logging.getLogger(__name__)

DEFAULT_CONTACT_PAGE_LIMIT = 25


class ContactsAPI(HighLevelCore):
    """Endpoints under /contacts."""

    # =========================================================================
    # Contacts
    # =========================================================================

    async def create_contact(self, contact: dict[str, Any]) -> ApiResult[Any]:
        """POST /contacts/ (returns the ``contact`` envelope field)."""
        return await self._call(
            "POST", "/contacts/", json=self._with_location(contact), unwrap="contact"
        )

    async def get_contact(self, contact_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/contacts/{contact_id}", unwrap="contact")

    async def update_contact(self, contact_id: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/contacts/{contact_id}", json=updates, unwrap="contact")

    async def delete_contact(self, contact_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/contacts/{contact_id}")

    async def search_contacts(
        self,
        *,
        location_id: str | None = None,
        query: str | None = None,
        limit: int | None = None,
        start_after_id: str | None = None,
        start_after: int | None = None,
        filters: dict[str, Any] | None = None,
    ) -> ApiResult[Any]:
        """
        POST /contacts/search.

        Only values that are actually set are sent: the remote endpoint
        rejects empty filters. This is the one contacts call that reports
        failures as ``ApiResult.fail`` instead of raising.

        Args:
            location_id: Location to search (defaults to configured location)
            query: Free-text query (trimmed)
            limit: Page size, sent as ``pageLimit`` (default 25)
            start_after_id: Cursor ID for pagination
            start_after: Cursor timestamp for pagination
            filters: Optional ``email``, ``phone``, ``tags``, ``dateAdded``

        Returns:
            ApiResult with ``{"contacts": [...], "total": N}`` on success
        """
        payload: dict[str, Any] = {
            "locationId": self._loc(location_id),
            "pageLimit": limit or DEFAULT_CONTACT_PAGE_LIMIT,
        }
        if query and query.strip():
            payload["query"] = query.strip()
        if start_after_id and start_after_id.strip():
            payload["startAfterId"] = start_after_id.strip()
        if (
            isinstance(start_after, (int, float))
            and not isinstance(start_after, bool)
            and start_after
        ):
            payload["startAfter"] = start_after

        if filters:
            search_filters: dict[str, Any] = {}
            email = filters.get("email")
            phone = filters.get("phone")
            tags = filters.get("tags")
            date_added = filters.get("dateAdded")
            if isinstance(email, str) and email.strip():
                search_filters["email"] = email.strip()
            if isinstance(phone, str) and phone.strip():
                search_filters["phone"] = phone.strip()
            if isinstance(tags, list) and tags:
                search_filters["tags"] = tags
            if isinstance(date_added, dict):
                search_filters["dateAdded"] = date_added
            if search_filters:
                payload["filters"] = search_filters

        logger.debug(f"[{self.name}] Search contacts payload: {json.dumps(payload)}")

        return await self._call(
            "POST",
            "/contacts/search",
            json=payload,
            policy=ErrorPolicy.RETURN_RESULT,
        )

    async def get_duplicate_contact(
        self,
        email: str | None = None,
        phone: str | None = None,
    ) -> ApiResult[Any]:
        """GET /contacts/search/duplicate (``None`` when no duplicate exists)."""
        params = compact(
            {"locationId": self._config.location_id, "email": email, "number": phone}
        )
        result = await self._call(
            "GET", "/contacts/search/duplicate", params=params, unwrap="contact"
        )
        return ApiResult.ok(result.data or None)

    async def upsert_contact(self, contact: dict[str, Any]) -> ApiResult[Any]:
        """POST /contacts/upsert (create or merge by email/phone)."""
        return await self._call("POST", "/contacts/upsert", json=self._with_location(contact))

    async def get_contacts_by_business(
        self,
        business_id: str,
        *,
        limit: int | None = None,
        skip: int | None = None,
        query: str | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "limit": limit or DEFAULT_CONTACT_PAGE_LIMIT,
                "skip": skip or 0,
                "query": query,
            }
        )
        return await self._call("GET", f"/contacts/business/{business_id}", params=params)

    async def get_contact_appointments(self, contact_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/contacts/{contact_id}/appointments", unwrap="events")

    # =========================================================================
    # Tags
    # =========================================================================

    async def add_contact_tags(self, contact_id: str, tags: list[str]) -> ApiResult[Any]:
        return await self._call("POST", f"/contacts/{contact_id}/tags", json={"tags": tags})

    async def remove_contact_tags(self, contact_id: str, tags: list[str]) -> ApiResult[Any]:
        return await self._call("DELETE", f"/contacts/{contact_id}/tags", json={"tags": tags})

    async def bulk_update_contact_tags(
        self,
        contact_ids: list[str],
        tags: list[str],
        operation: str,
        remove_all_tags: bool | None = None,
    ) -> ApiResult[Any]:
        """POST /contacts/tags/bulk (``operation`` is ``add`` or ``remove``)."""
        payload: dict[str, Any] = {"ids": contact_ids, "tags": tags, "operation": operation}
        if remove_all_tags is not None:
            payload["removeAllTags"] = remove_all_tags
        return await self._call("POST", "/contacts/tags/bulk", json=payload)

    async def bulk_update_contact_business(
        self,
        contact_ids: list[str],
        business_id: str | None = None,
    ) -> ApiResult[Any]:
        """POST /contacts/business/bulk (a missing business ID detaches the contacts)."""
        payload = {"ids": contact_ids, "businessId": business_id or None}
        return await self._call("POST", "/contacts/business/bulk", json=payload)

    # =========================================================================
    # Tasks
    # =========================================================================

    async def get_contact_tasks(self, contact_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/contacts/{contact_id}/tasks", unwrap="tasks")

    async def create_contact_task(self, contact_id: str, task: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/contacts/{contact_id}/tasks", json=task, unwrap="task"
        )

    async def get_contact_task(self, contact_id: str, task_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/contacts/{contact_id}/tasks/{task_id}", unwrap="task")

    async def update_contact_task(
        self, contact_id: str, task_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/contacts/{contact_id}/tasks/{task_id}", json=updates, unwrap="task"
        )

    async def delete_contact_task(self, contact_id: str, task_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/contacts/{contact_id}/tasks/{task_id}")

    async def update_task_completion(
        self, contact_id: str, task_id: str, completed: bool
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT",
            f"/contacts/{contact_id}/tasks/{task_id}/completed",
            json={"completed": completed},
            unwrap="task",
        )

    # =========================================================================
    # Notes
    # =========================================================================

    async def get_contact_notes(self, contact_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/contacts/{contact_id}/notes", unwrap="notes")

    async def create_contact_note(self, contact_id: str, note: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/contacts/{contact_id}/notes", json=note, unwrap="note"
        )

    async def get_contact_note(self, contact_id: str, note_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/contacts/{contact_id}/notes/{note_id}", unwrap="note")

    async def update_contact_note(
        self, contact_id: str, note_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/contacts/{contact_id}/notes/{note_id}", json=updates, unwrap="note"
        )

    async def delete_contact_note(self, contact_id: str, note_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/contacts/{contact_id}/notes/{note_id}")

    # =========================================================================
    # Followers, campaigns, workflows
    # =========================================================================

    async def add_contact_followers(self, contact_id: str, followers: list[str]) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/contacts/{contact_id}/followers", json={"followers": followers}
        )

    async def remove_contact_followers(
        self, contact_id: str, followers: list[str]
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/contacts/{contact_id}/followers", json={"followers": followers}
        )

    async def add_contact_to_campaign(self, contact_id: str, campaign_id: str) -> ApiResult[Any]:
        return await self._call("POST", f"/contacts/{contact_id}/campaigns/{campaign_id}")

    async def remove_contact_from_campaign(
        self, contact_id: str, campaign_id: str
    ) -> ApiResult[Any]:
        return await self._call("DELETE", f"/contacts/{contact_id}/campaigns/{campaign_id}")

    async def remove_contact_from_all_campaigns(self, contact_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/contacts/{contact_id}/campaigns")

    async def add_contact_to_workflow(
        self,
        contact_id: str,
        workflow_id: str,
        event_start_time: str | None = None,
    ) -> ApiResult[Any]:
        payload = {"eventStartTime": event_start_time} if event_start_time else {}
        return await self._call(
            "POST", f"/contacts/{contact_id}/workflow/{workflow_id}", json=payload
        )

    async def remove_contact_from_workflow(
        self,
        contact_id: str,
        workflow_id: str,
        event_start_time: str | None = None,
    ) -> ApiResult[Any]:
        payload = {"eventStartTime": event_start_time} if event_start_time else {}
        return await self._call(
            "DELETE", f"/contacts/{contact_id}/workflow/{workflow_id}", json=payload
        )
