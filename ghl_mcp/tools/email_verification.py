"""
Email Verification Tools.

Deliverability checks charged to a location wallet. Unlike the other
modules, ``verify_email`` never raises for remote failures: it returns
``{"success": False, "verification": {...}, "message": ...}`` so agents
can report an unverifiable address as a normal outcome.
"""

from __future__ import annotations

import logging
from typing import Any

from ghl_mcp.integrations.base import ErrorPolicy
from ghl_mcp.tools.module import ToolModule, ToolOperation, tool_operation
from ghl_mcp.tools.schema import obj, string

logger = logging.getLogger(__name__)


def _describe(verification: dict[str, Any]) -> str:
    """Summarize a verification response for agents."""
    # Processed verifications carry a "result"; others only a "message"
    if "result" not in verification:
        return f"Email verification not processed: {verification.get('message')}"

    message = (
        f"Email verification completed. Result: {verification.get('result')}, "
        f"Risk: {verification.get('risk')}"
    )
    reasons = verification.get("reason")
    if reasons:
        message += f", Reasons: {', '.join(str(reason) for reason in reasons)}"
    recommendation = verification.get("leadconnectorRecomendation") or {}
    if recommendation.get("isEmailValid") is not None:
        verdict = "Valid" if recommendation["isEmailValid"] else "Invalid"
        message += f", Recommended: {verdict}"
    return message


class EmailVerificationTools(ToolModule):
    """Tools for /email/verify."""

    module_name = "email verification"

    @tool_operation(
        name="verify_email",
        description=(
            "Verify email address deliverability and get risk assessment. "
            "Charges will be deducted from the specified location wallet."
        ),
        input_schema=obj(
            {
                "locationId": string(
                    "Location ID - charges will be deducted from this location wallet"
                ),
                "type": string(
                    'Verification type: "email" for direct email verification, '
                    '"contact" for contact ID verification',
                    enum=["email", "contact"],
                ),
                "verify": string(
                    "Email address to verify (if type=email) or contact ID (if type=contact)"
                ),
            },
            required=["locationId", "type", "verify"],
        ),
        error_policy=ErrorPolicy.RETURN_RESULT,
    )
    async def verify_email(self, args: dict[str, Any]) -> dict[str, Any]:
        result = await self.client.verify_email(
            args.get("locationId"), {"type": args.get("type"), "verify": args.get("verify")}
        )
        if not result.success or not result.data:
            return {
                "success": False,
                "verification": {
                    "verified": False,
                    "message": "Verification failed",
                    "address": args.get("verify"),
                },
                "message": (result.error.message if result.error else None)
                or "Email verification failed",
            }

        verification = result.data
        return {
            "success": True,
            "verification": verification,
            "message": _describe(verification) if isinstance(verification, dict) else "",
        }

    def _soft_failure(
        self, operation: ToolOperation, args: dict[str, Any], message: str
    ) -> dict[str, Any]:
        return {
            "success": False,
            "verification": {"verified": False, "message": message, "address": args.get("verify")},
            "message": f"Failed to {operation.action}: {message}",
        }
