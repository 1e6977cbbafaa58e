"""
Location Tools.

Sub-account administration for agents: locations, tags, task search,
custom fields and values, message templates and timezones.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.tools.module import ToolModule, tool_operation
from ghl_mcp.tools.schema import boolean, mapping, number, obj, string, string_list

logger = logging.getLogger(__name__)

_LOCATION = string("The location ID")


def _without(args: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Arguments minus the path identifiers, as the request body."""
    return {key: value for key, value in args.items() if key not in keys and value is not None}


def _items(data: Any, key: str) -> list[Any]:
    items = data.get(key) if isinstance(data, dict) else None
    return items or []


class LocationTools(ToolModule):
    """Tools for /locations endpoints."""

    module_name = "location"

    # =========================================================================
    # Locations
    # =========================================================================

    @tool_operation(
        name="search_locations",
        description="Search for locations/sub-accounts in GoHighLevel with filtering options",
        input_schema=obj(
            {
                "companyId": string("Company/Agency ID to filter locations"),
                "skip": number("Number of results to skip for pagination (default: 0)", default=0),
                "limit": number("Maximum number of locations to return (default: 10)", default=10),
                "order": string(
                    "Order of results (default: asc)", enum=["asc", "desc"], default="asc"
                ),
                "email": {**string("Filter by email address"), "format": "email"},
            }
        ),
    )
    async def search_locations(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.search_locations(
            company_id=args.get("companyId"),
            skip=args.get("skip"),
            limit=args.get("limit"),
            order=args.get("order"),
            email=args.get("email"),
        )
        locations = _items(self._require(result), "locations")
        return {
            "success": True,
            "locations": locations,
            "message": f"Found {len(locations)} locations",
        }

    @tool_operation(
        name="get_location",
        description="Get detailed information about a specific location/sub-account by ID",
        input_schema=obj(
            {"locationId": string("The unique ID of the location to retrieve")},
            required=["locationId"],
        ),
    )
    async def get_location(self, args: dict[str, Any]) -> dict[str, Any]:
        data = self._require(await self.client.get_location_by_id(args.get("locationId")))
        return {
            "success": True,
            "location": data.get("location"),
            "message": "Location retrieved successfully",
        }

    @tool_operation(
        name="create_location",
        description=(
            "Create a new sub-account/location in GoHighLevel (Agency Pro plan required)"
        ),
        input_schema=obj(
            {
                "name": string("Name of the sub-account/location"),
                "companyId": string("Company/Agency ID"),
                "phone": string("Phone number with country code (e.g., +1410039940)"),
                "address": string("Business address"),
                "city": string("City where business is located"),
                "state": string("State where business operates"),
                "country": string("2-letter country code (e.g., US, CA, GB)"),
                "postalCode": string("Postal/ZIP code"),
                "website": string("Business website URL"),
                "timezone": string("Business timezone (e.g., US/Central)"),
                "prospectInfo": {
                    **mapping(
                        "Prospect information for the location",
                        {
                            "firstName": string("Prospect first name"),
                            "lastName": string("Prospect last name"),
                            "email": {**string("Prospect email"), "format": "email"},
                        },
                    ),
                    "required": ["firstName", "lastName", "email"],
                },
                "snapshotId": string("Snapshot ID to load into the location"),
            },
            required=["name", "companyId"],
        ),
    )
    async def create_location(self, args: dict[str, Any]) -> dict[str, Any]:
        location = self._require(await self.client.create_location(_without(args)))
        return {
            "success": True,
            "location": location,
            "message": f'Location "{args.get("name")}" created successfully',
        }

    @tool_operation(
        name="update_location",
        description="Update an existing sub-account/location in GoHighLevel",
        input_schema=obj(
            {
                "locationId": string("The unique ID of the location to update"),
                "name": string("Updated name of the sub-account/location"),
                "companyId": string("Company/Agency ID"),
                "phone": string("Updated phone number"),
                "address": string("Updated business address"),
                "city": string("Updated city"),
                "state": string("Updated state"),
                "country": string("Updated 2-letter country code"),
                "postalCode": string("Updated postal/ZIP code"),
                "website": string("Updated website URL"),
                "timezone": string("Updated timezone"),
            },
            required=["locationId", "companyId"],
        ),
    )
    async def update_location(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.update_location(
            args.get("locationId"), _without(args, "locationId")
        )
        return {
            "success": True,
            "location": self._require(result),
            "message": "Location updated successfully",
        }

    @tool_operation(
        name="delete_location",
        description="Delete a sub-account/location from GoHighLevel",
        input_schema=obj(
            {
                "locationId": string("The unique ID of the location to delete"),
                "deleteTwilioAccount": boolean(
                    "Whether to delete associated Twilio account", default=False
                ),
            },
            required=["locationId", "deleteTwilioAccount"],
        ),
    )
    async def delete_location(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.delete_location(
            args.get("locationId"), bool(args.get("deleteTwilioAccount", False))
        )
        data = self._require(result)
        message = data.get("message") if isinstance(data, dict) else None
        return {"success": True, "message": message or "Location deleted successfully"}

    # =========================================================================
    # Tags
    # =========================================================================

    @tool_operation(
        name="get_location_tags",
        description="Get all tags for a specific location",
        input_schema=obj(
            {"locationId": string("The location ID to get tags from")}, required=["locationId"]
        ),
    )
    async def get_location_tags(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_location_tags(args.get("locationId"))
        tags = _items(self._require(result), "tags")
        return {"success": True, "tags": tags, "message": f"Retrieved {len(tags)} location tags"}

    @tool_operation(
        name="create_location_tag",
        description="Create a new tag for a location",
        input_schema=obj(
            {
                "locationId": string("The location ID to create tag in"),
                "name": string("Name of the tag to create"),
            },
            required=["locationId", "name"],
        ),
    )
    async def create_location_tag(self, args: dict[str, Any]) -> dict[str, Any]:
        name = args.get("name")
        result = await self.client.create_location_tag(args.get("locationId"), {"name": name})
        return {
            "success": True,
            "tag": self._require(result).get("tag"),
            "message": f'Tag "{name}" created successfully',
        }

    @tool_operation(
        name="get_location_tag",
        description="Get a specific location tag by ID",
        input_schema=obj(
            {"locationId": _LOCATION, "tagId": string("The tag ID to retrieve")},
            required=["locationId", "tagId"],
        ),
    )
    async def get_location_tag(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_location_tag(args.get("locationId"), args.get("tagId"))
        return {
            "success": True,
            "tag": self._require(result).get("tag"),
            "message": "Location tag retrieved successfully",
        }

    @tool_operation(
        name="update_location_tag",
        description="Update an existing location tag",
        input_schema=obj(
            {
                "locationId": _LOCATION,
                "tagId": string("The tag ID to update"),
                "name": string("Updated name for the tag"),
            },
            required=["locationId", "tagId", "name"],
        ),
    )
    async def update_location_tag(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.update_location_tag(
            args.get("locationId"), args.get("tagId"), {"name": args.get("name")}
        )
        return {
            "success": True,
            "tag": self._require(result).get("tag"),
            "message": "Location tag updated successfully",
        }

    @tool_operation(
        name="delete_location_tag",
        description="Delete a location tag",
        input_schema=obj(
            {"locationId": _LOCATION, "tagId": string("The tag ID to delete")},
            required=["locationId", "tagId"],
        ),
    )
    async def delete_location_tag(self, args: dict[str, Any]) -> dict[str, Any]:
        self._require(
            await self.client.delete_location_tag(args.get("locationId"), args.get("tagId"))
        )
        return {"success": True, "message": "Location tag deleted successfully"}

    # =========================================================================
    # Tasks
    # =========================================================================

    @tool_operation(
        name="search_location_tasks",
        description="Search tasks within a location with advanced filtering",
        input_schema=obj(
            {
                "locationId": string("The location ID to search tasks in"),
                "contactId": string_list("Filter by specific contact IDs"),
                "completed": boolean("Filter by completion status"),
                "assignedTo": string_list("Filter by assigned user IDs"),
                "query": string("Search query for task content"),
                "limit": number("Maximum number of tasks to return (default: 25)", default=25),
                "skip": number("Number of tasks to skip for pagination (default: 0)", default=0),
                "businessId": string("Business ID filter"),
            },
            required=["locationId"],
        ),
    )
    async def search_location_tasks(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.search_location_tasks(
            args.get("locationId"), _without(args, "locationId")
        )
        tasks = _items(self._require(result), "tasks")
        return {"success": True, "tasks": tasks, "message": f"Found {len(tasks)} tasks"}

    # =========================================================================
    # Custom fields
    # =========================================================================

    @tool_operation(
        name="get_location_custom_fields",
        description="Get custom fields for a location, optionally filtered by model type",
        input_schema=obj(
            {
                "locationId": _LOCATION,
                "model": string(
                    "Filter by model type (default: all)",
                    enum=["contact", "opportunity", "all"],
                    default="all",
                ),
            },
            required=["locationId"],
        ),
        action="get custom fields",
    )
    async def get_location_custom_fields(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_location_custom_fields(
            args.get("locationId"), args.get("model")
        )
        fields = _items(self._require(result), "customFields")
        return {
            "success": True,
            "customFields": fields,
            "message": f"Retrieved {len(fields)} custom fields",
        }

    @tool_operation(
        name="create_location_custom_field",
        description="Create a new custom field for a location",
        input_schema=obj(
            {
                "locationId": _LOCATION,
                "name": string("Name of the custom field"),
                "dataType": string("Data type of the field (TEXT, NUMBER, DATE, etc.)"),
                "placeholder": string("Placeholder text for the field"),
                "model": string(
                    "Model to create the field for",
                    enum=["contact", "opportunity"],
                    default="contact",
                ),
                "position": number("Position/order of the field (default: 0)", default=0),
            },
            required=["locationId", "name", "dataType"],
        ),
        action="create custom field",
    )
    async def create_location_custom_field(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.create_location_custom_field(
            args.get("locationId"), _without(args, "locationId")
        )
        return {
            "success": True,
            "customField": self._require(result).get("customField"),
            "message": f'Custom field "{args.get("name")}" created successfully',
        }

    @tool_operation(
        name="get_location_custom_field",
        description="Get a specific custom field by ID",
        input_schema=obj(
            {"locationId": _LOCATION, "customFieldId": string("The custom field ID to retrieve")},
            required=["locationId", "customFieldId"],
        ),
        action="get custom field",
    )
    async def get_location_custom_field(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_location_custom_field(
            args.get("locationId"), args.get("customFieldId")
        )
        return {
            "success": True,
            "customField": self._require(result).get("customField"),
            "message": "Custom field retrieved successfully",
        }

    @tool_operation(
        name="update_location_custom_field",
        description="Update an existing custom field",
        input_schema=obj(
            {
                "locationId": _LOCATION,
                "customFieldId": string("The custom field ID to update"),
                "name": string("Updated name of the custom field"),
                "placeholder": string("Updated placeholder text"),
                "position": number("Updated position/order"),
            },
            required=["locationId", "customFieldId", "name"],
        ),
        action="update custom field",
    )
    async def update_location_custom_field(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.update_location_custom_field(
            args.get("locationId"),
            args.get("customFieldId"),
            _without(args, "locationId", "customFieldId"),
        )
        return {
            "success": True,
            "customField": self._require(result).get("customField"),
            "message": "Custom field updated successfully",
        }

    @tool_operation(
        name="delete_location_custom_field",
        description="Delete a custom field from a location",
        input_schema=obj(
            {"locationId": _LOCATION, "customFieldId": string("The custom field ID to delete")},
            required=["locationId", "customFieldId"],
        ),
        action="delete custom field",
    )
    async def delete_location_custom_field(self, args: dict[str, Any]) -> dict[str, Any]:
        self._require(
            await self.client.delete_location_custom_field(
                args.get("locationId"), args.get("customFieldId")
            )
        )
        return {"success": True, "message": "Custom field deleted successfully"}

    # =========================================================================
    # Custom values
    # =========================================================================

    @tool_operation(
        name="get_location_custom_values",
        description="Get all custom values for a location",
        input_schema=obj({"locationId": _LOCATION}, required=["locationId"]),
        action="get custom values",
    )
    async def get_location_custom_values(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_location_custom_values(args.get("locationId"))
        values = _items(self._require(result), "customValues")
        return {
            "success": True,
            "customValues": values,
            "message": f"Retrieved {len(values)} custom values",
        }

    @tool_operation(
        name="create_location_custom_value",
        description="Create a new custom value for a location",
        input_schema=obj(
            {
                "locationId": _LOCATION,
                "name": string("Name of the custom value field"),
                "value": string("Value to assign"),
            },
            required=["locationId", "name", "value"],
        ),
        action="create custom value",
    )
    async def create_location_custom_value(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.create_location_custom_value(
            args.get("locationId"), _without(args, "locationId")
        )
        return {
            "success": True,
            "customValue": self._require(result).get("customValue"),
            "message": f'Custom value "{args.get("name")}" created successfully',
        }

    @tool_operation(
        name="get_location_custom_value",
        description="Get a specific custom value by ID",
        input_schema=obj(
            {"locationId": _LOCATION, "customValueId": string("The custom value ID to retrieve")},
            required=["locationId", "customValueId"],
        ),
        action="get custom value",
    )
    async def get_location_custom_value(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_location_custom_value(
            args.get("locationId"), args.get("customValueId")
        )
        return {
            "success": True,
            "customValue": self._require(result).get("customValue"),
            "message": "Custom value retrieved successfully",
        }

    @tool_operation(
        name="update_location_custom_value",
        description="Update an existing custom value",
        input_schema=obj(
            {
                "locationId": _LOCATION,
                "customValueId": string("The custom value ID to update"),
                "name": string("Updated name"),
                "value": string("Updated value"),
            },
            required=["locationId", "customValueId", "name", "value"],
        ),
        action="update custom value",
    )
    async def update_location_custom_value(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.update_location_custom_value(
            args.get("locationId"),
            args.get("customValueId"),
            _without(args, "locationId", "customValueId"),
        )
        return {
            "success": True,
            "customValue": self._require(result).get("customValue"),
            "message": "Custom value updated successfully",
        }

    @tool_operation(
        name="delete_location_custom_value",
        description="Delete a custom value from a location",
        input_schema=obj(
            {"locationId": _LOCATION, "customValueId": string("The custom value ID to delete")},
            required=["locationId", "customValueId"],
        ),
        action="delete custom value",
    )
    async def delete_location_custom_value(self, args: dict[str, Any]) -> dict[str, Any]:
        self._require(
            await self.client.delete_location_custom_value(
                args.get("locationId"), args.get("customValueId")
            )
        )
        return {"success": True, "message": "Custom value deleted successfully"}

    # =========================================================================
    # Templates and timezones
    # =========================================================================

    @tool_operation(
        name="get_location_templates",
        description="Get SMS/Email templates for a location",
        input_schema=obj(
            {
                "locationId": _LOCATION,
                "originId": string("Origin ID (required parameter)"),
                "deleted": boolean("Include deleted templates (default: false)", default=False),
                "skip": number("Number to skip for pagination (default: 0)", default=0),
                "limit": number("Maximum number to return (default: 25)", default=25),
                "type": string("Filter by template type", enum=["sms", "email", "whatsapp"]),
            },
            required=["locationId", "originId"],
        ),
    )
    async def get_location_templates(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.get_location_templates(
            args.get("locationId"),
            args.get("originId"),
            deleted=bool(args.get("deleted", False)),
            skip=args.get("skip"),
            limit=args.get("limit"),
            template_type=args.get("type"),
        )
        data = self._require(result)
        templates = _items(data, "templates")
        total = data.get("totalCount") or len(templates)
        return {
            "success": True,
            "templates": templates,
            "totalCount": total,
            "message": f"Retrieved {len(templates)} templates ({total} total)",
        }

    @tool_operation(
        name="delete_location_template",
        description="Delete a template from a location",
        input_schema=obj(
            {"locationId": _LOCATION, "templateId": string("The template ID to delete")},
            required=["locationId", "templateId"],
        ),
        action="delete template",
    )
    async def delete_location_template(self, args: dict[str, Any]) -> dict[str, Any]:
        # An empty body is a valid response here
        self._unwrap(
            await self.client.delete_location_template(
                args.get("locationId"), args.get("templateId")
            )
        )
        return {"success": True, "message": "Template deleted successfully"}

    @tool_operation(
        name="get_timezones",
        description="Get available timezones for location configuration",
        input_schema=obj({"locationId": string("Optional location ID")}),
    )
    async def get_timezones(self, args: dict[str, Any]) -> dict[str, Any]:
        data = self._require(await self.client.get_timezones(args.get("locationId")))
        timezones = data if isinstance(data, list) else []
        return {
            "success": True,
            "timezones": timezones,
            "message": f"Retrieved {len(timezones)} available timezones",
        }
