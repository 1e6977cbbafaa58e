"""Workflow Tools: list automation workflows with per-status counts."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from ghl_mcp.tools.module import ToolModule, tool_operation
from ghl_mcp.tools.schema import string

logger = logging.getLogger(__name__)


class WorkflowTools(ToolModule):
    """Tools for /workflows endpoints."""

    module_name = "workflow"

    @tool_operation(
        name="ghl_get_workflows",
        description=(
            "Retrieve all workflows for a location. Workflows represent automation "
            "sequences that can be triggered by various events in the system."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "locationId": string(
                    "The location ID to get workflows for. If not provided, uses the "
                    "default location from configuration."
                )
            },
            "additionalProperties": False,
        },
        action="get workflows",
    )
    async def get_workflows(self, args: dict[str, Any]) -> dict[str, Any]:
        data = self._require(await self.client.get_workflows(args.get("locationId")))
        workflows = data.get("workflows") or []
        statuses = Counter(workflow.get("status") for workflow in workflows)
        return {
            "success": True,
            "workflows": workflows,
            "message": f"Successfully retrieved {len(workflows)} workflows",
            "metadata": {
                "totalWorkflows": len(workflows),
                "workflowStatuses": dict(statuses),
            },
        }
