"""
Custom data model APIs.

Custom object schemas and records, associations and relations between
records, and the v2 custom fields API (fields and folders keyed by
object).
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class ObjectsAPI(HighLevelCore):
    """Endpoints under /objects, /associations and /custom-fields."""

    # =========================================================================
    # Object schemas
    # =========================================================================

    async def get_objects_by_location(self, location_id: str | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/objects/", params={"locationId": self._loc(location_id)})

    async def create_object_schema(self, schema: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/objects/", json=self._with_location(schema))

    async def get_object_schema(
        self,
        key: str,
        *,
        location_id: str | None = None,
        fetch_properties: bool | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {"locationId": self._loc(location_id), "fetchProperties": fetch_properties}
        )
        return await self._call("GET", f"/objects/{key}", params=params)

    async def update_object_schema(self, key: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/objects/{key}", json=self._with_location(updates))

    # =========================================================================
    # Object records
    # =========================================================================

    async def create_object_record(
        self, schema_key: str, record: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/objects/{schema_key}/records", json=self._with_location(record)
        )

    async def get_object_record(self, schema_key: str, record_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/objects/{schema_key}/records/{record_id}")

    async def update_object_record(
        self, schema_key: str, record_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        """PUT /objects/{key}/records/{id} (``locationId`` goes in the query)."""
        return await self._call(
            "PUT",
            f"/objects/{schema_key}/records/{record_id}",
            params={"locationId": self._loc(updates.get("locationId"))},
            json=updates,
        )

    async def delete_object_record(self, schema_key: str, record_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/objects/{schema_key}/records/{record_id}")

    async def search_object_records(
        self, schema_key: str, search: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/objects/{schema_key}/records/search", json=self._with_location(search)
        )

    # =========================================================================
    # Associations
    # =========================================================================

    async def get_associations(
        self, skip: int = 0, limit: int = 20, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            "/associations/",
            params={"locationId": self._loc(location_id), "skip": skip, "limit": limit},
        )

    async def create_association(self, association: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/associations/", json=self._with_location(association)
        )

    async def get_association_by_id(self, association_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/associations/{association_id}")

    async def update_association(
        self, association_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call("PUT", f"/associations/{association_id}", json=updates)

    async def delete_association(self, association_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/associations/{association_id}")

    async def get_association_by_key(
        self, key_name: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/associations/key/{key_name}",
            params={"locationId": self._loc(location_id)},
        )

    async def get_association_by_object_key(
        self, object_key: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        """GET /associations/objectKey/{key} (no location default on this one)."""
        return await self._call(
            "GET",
            f"/associations/objectKey/{object_key}",
            params=compact({"locationId": location_id}),
        )

    async def create_relation(self, relation: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/associations/relations", json=self._with_location(relation)
        )

    async def get_relations_by_record(
        self,
        record_id: str,
        skip: int = 0,
        limit: int = 20,
        *,
        location_id: str | None = None,
        association_ids: list[str] | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "locationId": self._loc(location_id),
                "skip": skip,
                "limit": limit,
                "associationIds": association_ids,
            }
        )
        return await self._call("GET", f"/associations/relations/{record_id}", params=params)

    async def delete_relation(
        self, relation_id: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/associations/relations/{relation_id}",
            params={"locationId": self._loc(location_id)},
        )

    # =========================================================================
    # Custom fields (v2)
    # =========================================================================

    async def get_custom_field_v2_by_id(self, field_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/custom-fields/{field_id}")

    async def create_custom_field_v2(self, field: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/custom-fields/", json=self._with_location(field))

    async def update_custom_field_v2(self, field_id: str, field: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/custom-fields/{field_id}", json=self._with_location(field)
        )

    async def delete_custom_field_v2(self, field_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/custom-fields/{field_id}")

    async def get_custom_fields_v2_by_object_key(
        self, object_key: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/custom-fields/object-key/{object_key}",
            params={"locationId": self._loc(location_id)},
        )

    async def create_custom_field_v2_folder(self, folder: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/custom-fields/folder", json=self._with_location(folder)
        )

    async def update_custom_field_v2_folder(
        self, folder_id: str, folder: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/custom-fields/folder/{folder_id}", json=self._with_location(folder)
        )

    async def delete_custom_field_v2_folder(
        self, folder_id: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/custom-fields/folder/{folder_id}",
            params={"locationId": self._loc(location_id)},
        )
