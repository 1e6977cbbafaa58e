"""
Calendars API.

Calendar groups, calendars, events and slots, appointments and their
notes, bookable resources (rooms/equipment) and calendar notifications.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class CalendarsAPI(HighLevelCore):
    """Endpoints under /calendars."""

    # =========================================================================
    # Groups
    # =========================================================================

    async def get_calendar_groups(self, location_id: str | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", "/calendars/groups", params={"locationId": self._loc(location_id)}
        )

    async def create_calendar_group(self, group: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/calendars/groups", json=self._with_location(group))

    async def validate_calendar_group_slug(
        self, slug: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            "/calendars/groups/slug/validate",
            params={"locationId": self._loc(location_id), "slug": slug},
        )

    async def update_calendar_group(self, group_id: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/calendars/groups/{group_id}", json=updates)

    async def delete_calendar_group(self, group_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/calendars/groups/{group_id}")

    async def disable_calendar_group(self, group_id: str, is_active: bool) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/calendars/groups/{group_id}/status", json={"isActive": is_active}
        )

    # =========================================================================
    # Calendars
    # =========================================================================

    async def get_calendars(
        self,
        *,
        location_id: str | None = None,
        group_id: str | None = None,
        show_drafted: bool | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "locationId": self._loc(location_id),
                "groupId": group_id,
                "showDrafted": show_drafted,
            }
        )
        return await self._call("GET", "/calendars/", params=params)

    async def create_calendar(self, calendar: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/calendars/", json=self._with_location(calendar))

    async def get_calendar(self, calendar_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/calendars/{calendar_id}")

    async def update_calendar(self, calendar_id: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/calendars/{calendar_id}", json=updates)

    async def delete_calendar(self, calendar_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/calendars/{calendar_id}")

    # =========================================================================
    # Events and slots
    # =========================================================================

    def _event_window(self, window: dict[str, Any]) -> dict[str, Any]:
        """Query for event/blocked-slot listings: a time range plus one owner filter."""
        return compact(
            {
                "locationId": self._loc(window.get("locationId")),
                "startTime": window.get("startTime"),
                "endTime": window.get("endTime"),
                "userId": window.get("userId"),
                "calendarId": window.get("calendarId"),
                "groupId": window.get("groupId"),
            }
        )

    async def get_calendar_events(self, window: dict[str, Any]) -> ApiResult[Any]:
        """
        GET /calendars/events.

        Args:
            window: ``startTime``/``endTime`` (epoch millis as strings) and
                one of ``userId``, ``calendarId`` or ``groupId``
        """
        return await self._call("GET", "/calendars/events", params=self._event_window(window))

    async def get_blocked_slots(self, window: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "GET", "/calendars/blocked-slots", params=self._event_window(window)
        )

    async def get_free_slots(
        self,
        calendar_id: str,
        start_date: int | str,
        end_date: int | str,
        *,
        timezone: str | None = None,
        user_id: str | None = None,
        user_ids: list[str] | None = None,
        enable_look_busy: bool | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "startDate": start_date,
                "endDate": end_date,
                "timezone": timezone,
                "userId": user_id,
                "userIds": user_ids,
                "enableLookBusy": enable_look_busy,
            }
        )
        return await self._call("GET", f"/calendars/{calendar_id}/free-slots", params=params)

    async def create_block_slot(self, block_slot: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/calendars/blocked-slots", json=self._with_location(block_slot)
        )

    async def update_block_slot(
        self, block_slot_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/calendars/events/block-slots/{block_slot_id}", json=updates
        )

    # =========================================================================
    # Appointments
    # =========================================================================

    async def create_appointment(self, appointment: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/calendars/events/appointments", json=self._with_location(appointment)
        )

    async def get_appointment(self, appointment_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/calendars/events/appointments/{appointment_id}")

    async def update_appointment(
        self, appointment_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/calendars/events/appointments/{appointment_id}", json=updates
        )

    async def delete_appointment(self, appointment_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/calendars/events/appointments/{appointment_id}")

    async def get_appointment_notes(
        self, appointment_id: str, limit: int = 10, offset: int = 0
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/calendars/events/appointments/{appointment_id}/notes",
            params={"limit": limit, "offset": offset},
        )

    async def create_appointment_note(
        self, appointment_id: str, note: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/calendars/events/appointments/{appointment_id}/notes", json=note
        )

    async def update_appointment_note(
        self, appointment_id: str, note_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT",
            f"/calendars/events/appointments/{appointment_id}/notes/{note_id}",
            json=updates,
        )

    async def delete_appointment_note(self, appointment_id: str, note_id: str) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/calendars/events/appointments/{appointment_id}/notes/{note_id}"
        )

    # =========================================================================
    # Resources (resource_type is "equipments" or "rooms")
    # =========================================================================

    async def get_calendar_resources(
        self,
        resource_type: str,
        limit: int = 20,
        skip: int = 0,
        location_id: str | None = None,
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/calendars/resources/{resource_type}",
            params={"locationId": self._loc(location_id), "limit": limit, "skip": skip},
        )

    async def create_calendar_resource(
        self, resource_type: str, resource: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/calendars/resources/{resource_type}", json=self._with_location(resource)
        )

    async def get_calendar_resource(self, resource_type: str, resource_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/calendars/resources/{resource_type}/{resource_id}")

    async def update_calendar_resource(
        self, resource_type: str, resource_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/calendars/resources/{resource_type}/{resource_id}", json=updates
        )

    async def delete_calendar_resource(
        self, resource_type: str, resource_id: str
    ) -> ApiResult[Any]:
        return await self._call("DELETE", f"/calendars/resources/{resource_type}/{resource_id}")

    # =========================================================================
    # Notifications
    # =========================================================================

    async def get_calendar_notifications(
        self, calendar_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/calendars/{calendar_id}/notifications", params=compact(params)
        )

    async def create_calendar_notifications(
        self, calendar_id: str, notifications: list[dict[str, Any]]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST",
            f"/calendars/{calendar_id}/notifications",
            json={"notifications": notifications},
        )

    async def get_calendar_notification(
        self, calendar_id: str, notification_id: str
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/calendars/{calendar_id}/notifications/{notification_id}"
        )

    async def update_calendar_notification(
        self, calendar_id: str, notification_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/calendars/{calendar_id}/notifications/{notification_id}", json=updates
        )

    async def delete_calendar_notification(
        self, calendar_id: str, notification_id: str
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/calendars/{calendar_id}/notifications/{notification_id}"
        )
