"""
Email Tools.

Email marketing for agents: scheduled campaigns and email-builder
templates.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.tools.module import ToolModule, tool_operation
from ghl_mcp.tools.schema import boolean, number, obj, string

logger = logging.getLogger(__name__)

CAMPAIGN_STATUSES = [
    "active",
    "pause",
    "complete",
    "cancelled",
    "retry",
    "draft",
    "resend-scheduled",
]


class EmailTools(ToolModule):
    """Tools for /emails endpoints."""

    module_name = "email"

    @tool_operation(
        name="get_email_campaigns",
        description="Get a list of email campaigns from GoHighLevel.",
        input_schema=obj(
            {
                "status": string(
                    "Filter campaigns by status.", enum=CAMPAIGN_STATUSES, default="active"
                ),
                "limit": number("Maximum number of campaigns to return.", default=10),
                "offset": number("Number of campaigns to skip for pagination.", default=0),
            }
        ),
    )
    async def get_email_campaigns(self, args: dict[str, Any]) -> dict[str, Any]:
        params = self._pick(args, "status", "limit", "offset")
        data = self._require(await self.client.get_email_campaigns(params))
        campaigns = data.get("schedules") or []
        return {
            "success": True,
            "campaigns": campaigns,
            "total": data.get("total"),
            "message": f"Successfully retrieved {len(campaigns)} email campaigns.",
        }

    @tool_operation(
        name="create_email_template",
        description="Create a new email template in GoHighLevel.",
        input_schema=obj(
            {
                "title": string("Title of the new template."),
                "html": string("HTML content of the template."),
                "isPlainText": boolean("Whether the template is plain text.", default=False),
            },
            required=["title", "html"],
        ),
    )
    async def create_email_template(self, args: dict[str, Any]) -> dict[str, Any]:
        template = self._pick(args, "title", "html", "isPlainText")
        created = self._require(await self.client.create_email_template(template))
        return {
            "success": True,
            "template": created,
            "message": "Successfully created email template.",
        }

    @tool_operation(
        name="get_email_templates",
        description="Get a list of email templates from GoHighLevel.",
        input_schema=obj(
            {
                "limit": number("Maximum number of templates to return.", default=10),
                "offset": number("Number of templates to skip for pagination.", default=0),
            }
        ),
    )
    async def get_email_templates(self, args: dict[str, Any]) -> dict[str, Any]:
        params = self._pick(args, "limit", "offset")
        templates = self._require(await self.client.get_email_templates(params))
        count = len(templates) if isinstance(templates, list) else 0
        return {
            "success": True,
            "templates": templates,
            "message": f"Successfully retrieved {count} email templates.",
        }

    @tool_operation(
        name="update_email_template",
        description="Update an existing email template in GoHighLevel.",
        input_schema=obj(
            {
                "templateId": string("The ID of the template to update."),
                "html": string("The updated HTML content of the template."),
                "previewText": string("The updated preview text for the template."),
            },
            required=["templateId", "html"],
        ),
    )
    async def update_email_template(self, args: dict[str, Any]) -> dict[str, Any]:
        template = self._pick(args, "html", "previewText")
        self._unwrap(await self.client.update_email_template(args.get("templateId"), template))
        return {"success": True, "message": "Successfully updated email template."}

    @tool_operation(
        name="delete_email_template",
        description="Delete an email template from GoHighLevel.",
        input_schema=obj(
            {"templateId": string("The ID of the template to delete.")},
            required=["templateId"],
        ),
    )
    async def delete_email_template(self, args: dict[str, Any]) -> dict[str, Any]:
        self._unwrap(await self.client.delete_email_template(args.get("templateId")))
        return {"success": True, "message": "Successfully deleted email template."}
