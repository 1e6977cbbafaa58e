"""
Opportunity Tools.

Sales pipeline management for agents: search, pipelines, CRUD, status
changes, upsert and followers.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.tools.module import ToolModule, tool_operation
from ghl_mcp.tools.schema import number, obj, string, string_list

logger = logging.getLogger(__name__)

OPPORTUNITY_STATUSES = ["open", "won", "lost", "abandoned"]
DEFAULT_SEARCH_LIMIT = 20

# Tool argument name -> opportunities search query name
_SEARCH_ARGS = {
    "pipelineId": "pipeline_id",
    "pipelineStageId": "pipeline_stage_id",
    "contactId": "contact_id",
    "status": "status",
    "assignedTo": "assigned_to",
}

_OPPORTUNITY_ID = string("The unique ID of the opportunity")


class OpportunityTools(ToolModule):
    """Tools for /opportunities endpoints."""

    module_name = "opportunity"

    @tool_operation(
        name="search_opportunities",
        description=(
            "Search for opportunities in GoHighLevel CRM using various filters "
            "like pipeline, stage, contact, status, etc."
        ),
        input_schema=obj(
            {
                "query": string("General search query (searches name, contact info)"),
                "pipelineId": string("Filter by specific pipeline ID"),
                "pipelineStageId": string("Filter by specific pipeline stage ID"),
                "contactId": string("Filter by specific contact ID"),
                "status": string(
                    "Filter by opportunity status", enum=[*OPPORTUNITY_STATUSES, "all"]
                ),
                "assignedTo": string("Filter by assigned user ID"),
                "limit": number(
                    "Maximum number of opportunities to return (default: 20, max: 100)",
                    minimum=1,
                    maximum=100,
                    default=DEFAULT_SEARCH_LIMIT,
                ),
            }
        ),
    )
    async def search_opportunities(self, args: dict[str, Any]) -> dict[str, Any]:
        search: dict[str, Any] = {
            "location_id": self.client.location_id,
            "limit": args.get("limit") or DEFAULT_SEARCH_LIMIT,
            "q": args.get("query"),
        }
        for arg, param in _SEARCH_ARGS.items():
            if args.get(arg):
                search[param] = args[arg]

        data = self._require(await self.client.search_opportunities(search))
        opportunities = data.get("opportunities")
        if not isinstance(opportunities, list):
            opportunities = []
        meta = data.get("meta")
        total = (meta or {}).get("total") or len(opportunities)
        return {
            "success": True,
            "opportunities": opportunities,
            "meta": meta,
            "message": f"Found {len(opportunities)} opportunities ({total} total)",
        }

    @tool_operation(
        name="get_pipelines",
        description="Get all sales pipelines configured in GoHighLevel",
        input_schema=obj({}),
    )
    async def get_pipelines(self, args: dict[str, Any]) -> dict[str, Any]:
        data = self._require(await self.client.get_pipelines())
        pipelines = data.get("pipelines")
        if not isinstance(pipelines, list):
            pipelines = []
        return {
            "success": True,
            "pipelines": pipelines,
            "message": f"Retrieved {len(pipelines)} pipelines",
        }

    @tool_operation(
        name="get_opportunity",
        description="Get detailed information about a specific opportunity by ID",
        input_schema=obj(
            {"opportunityId": string("The unique ID of the opportunity to retrieve")},
            required=["opportunityId"],
        ),
    )
    async def get_opportunity(self, args: dict[str, Any]) -> dict[str, Any]:
        opportunity = self._require(await self.client.get_opportunity(args.get("opportunityId")))
        return {
            "success": True,
            "opportunity": opportunity,
            "message": "Opportunity retrieved successfully",
        }

    @tool_operation(
        name="create_opportunity",
        description="Create a new opportunity in GoHighLevel CRM",
        input_schema=obj(
            {
                "name": string("Name/title of the opportunity"),
                "pipelineId": string("ID of the pipeline this opportunity belongs to"),
                "contactId": string("ID of the contact associated with this opportunity"),
                "status": string(
                    "Initial status of the opportunity (default: open)",
                    enum=OPPORTUNITY_STATUSES,
                    default="open",
                ),
                "monetaryValue": number("Monetary value of the opportunity in dollars"),
                "assignedTo": string("User ID to assign this opportunity to"),
            },
            required=["name", "pipelineId", "contactId"],
        ),
    )
    async def create_opportunity(self, args: dict[str, Any]) -> dict[str, Any]:
        opportunity = {
            **self._pick(
                args,
                "name",
                "pipelineId",
                "contactId",
                "pipelineStageId",
                "monetaryValue",
                "assignedTo",
                "customFields",
            ),
            "status": args.get("status") or "open",
        }
        created = self._require(await self.client.create_opportunity(opportunity))
        return {
            "success": True,
            "opportunity": created,
            "message": f"Opportunity created successfully with ID: {created.get('id')}",
        }

    @tool_operation(
        name="update_opportunity_status",
        description="Update the status of an opportunity (won, lost, etc.)",
        input_schema=obj(
            {
                "opportunityId": _OPPORTUNITY_ID,
                "status": string("New status for the opportunity", enum=OPPORTUNITY_STATUSES),
            },
            required=["opportunityId", "status"],
        ),
    )
    async def update_opportunity_status(self, args: dict[str, Any]) -> dict[str, Any]:
        status = args.get("status")
        self._require(
            await self.client.update_opportunity_status(args.get("opportunityId"), status)
        )
        return {"success": True, "message": f"Opportunity status updated to {status}"}

    @tool_operation(
        name="delete_opportunity",
        description="Delete an opportunity from GoHighLevel CRM",
        input_schema=obj(
            {"opportunityId": string("The unique ID of the opportunity to delete")},
            required=["opportunityId"],
        ),
    )
    async def delete_opportunity(self, args: dict[str, Any]) -> dict[str, Any]:
        self._require(await self.client.delete_opportunity(args.get("opportunityId")))
        return {"success": True, "message": "Opportunity deleted successfully"}

    @tool_operation(
        name="update_opportunity",
        description="Update an existing opportunity with new details (full update)",
        input_schema=obj(
            {
                "opportunityId": string("The unique ID of the opportunity to update"),
                "name": string("Updated name/title of the opportunity"),
                "pipelineId": string("Updated pipeline ID"),
                "pipelineStageId": string("Updated pipeline stage ID"),
                "status": string("Updated status of the opportunity", enum=OPPORTUNITY_STATUSES),
                "monetaryValue": number("Updated monetary value in dollars"),
                "assignedTo": string("Updated assigned user ID"),
            },
            required=["opportunityId"],
        ),
    )
    async def update_opportunity(self, args: dict[str, Any]) -> dict[str, Any]:
        updates = {
            key: args[key]
            for key in ("name", "pipelineId", "pipelineStageId", "status", "assignedTo")
            if args.get(key)
        }
        # Zero is a valid monetary value
        if args.get("monetaryValue") is not None:
            updates["monetaryValue"] = args["monetaryValue"]

        updated = self._require(
            await self.client.update_opportunity(args.get("opportunityId"), updates)
        )
        return {
            "success": True,
            "opportunity": updated,
            "message": "Opportunity updated successfully",
        }

    @tool_operation(
        name="upsert_opportunity",
        description=(
            "Create or update an opportunity based on contact and pipeline (smart merge)"
        ),
        input_schema=obj(
            {
                "name": string("Name/title of the opportunity"),
                "pipelineId": string("ID of the pipeline this opportunity belongs to"),
                "contactId": string("ID of the contact associated with this opportunity"),
                "status": string(
                    "Status of the opportunity", enum=OPPORTUNITY_STATUSES, default="open"
                ),
                "pipelineStageId": string("Pipeline stage ID"),
                "monetaryValue": number("Monetary value of the opportunity in dollars"),
                "assignedTo": string("User ID to assign this opportunity to"),
            },
            required=["pipelineId", "contactId"],
        ),
    )
    async def upsert_opportunity(self, args: dict[str, Any]) -> dict[str, Any]:
        opportunity = {
            **self._pick(
                args,
                "pipelineId",
                "contactId",
                "name",
                "pipelineStageId",
                "monetaryValue",
                "assignedTo",
            ),
            "status": args.get("status") or "open",
        }
        data = self._require(await self.client.upsert_opportunity(opportunity))
        is_new = bool(data.get("new"))
        return {
            "success": True,
            "opportunity": data.get("opportunity"),
            "isNew": is_new,
            "message": f"Opportunity {'created' if is_new else 'updated'} successfully",
        }

    @tool_operation(
        name="add_opportunity_followers",
        description="Add followers to an opportunity for notifications and tracking",
        input_schema=obj(
            {
                "opportunityId": _OPPORTUNITY_ID,
                "followers": string_list("Array of user IDs to add as followers"),
            },
            required=["opportunityId", "followers"],
        ),
    )
    async def add_opportunity_followers(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.add_opportunity_followers(
            args.get("opportunityId"), args.get("followers") or []
        )
        data = self._require(result)
        added = data.get("followersAdded") or []
        return {
            "success": True,
            "followers": data.get("followers") or [],
            "followersAdded": added,
            "message": f"Added {len(added)} followers to opportunity",
        }

    @tool_operation(
        name="remove_opportunity_followers",
        description="Remove followers from an opportunity",
        input_schema=obj(
            {
                "opportunityId": _OPPORTUNITY_ID,
                "followers": string_list("Array of user IDs to remove as followers"),
            },
            required=["opportunityId", "followers"],
        ),
    )
    async def remove_opportunity_followers(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.remove_opportunity_followers(
            args.get("opportunityId"), args.get("followers") or []
        )
        data = self._require(result)
        removed = data.get("followersRemoved") or []
        return {
            "success": True,
            "followers": data.get("followers") or [],
            "followersRemoved": removed,
            "message": f"Removed {len(removed)} followers from opportunity",
        }
