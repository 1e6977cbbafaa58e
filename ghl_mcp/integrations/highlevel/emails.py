"""Email builder (campaigns and templates) and email verification APIs."""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class EmailsAPI(HighLevelCore):
    """Endpoints under /emails and /email/verify."""

    async def get_email_campaigns(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        """GET /emails/schedule (``status``, ``limit``, ``offset``)."""
        return await self._call(
            "GET",
            "/emails/schedule",
            params={"locationId": self.location_id, **compact(params)},
        )

    async def create_email_template(self, template: dict[str, Any]) -> ApiResult[Any]:
        """POST /emails/builder (``type`` defaults to ``html``)."""
        payload = {"locationId": self.location_id, "type": "html", **compact(template)}
        return await self._call("POST", "/emails/builder", json=payload)

    async def get_email_templates(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET",
            "/emails/builder",
            params={"locationId": self.location_id, **compact(params)},
        )

    async def update_email_template(
        self, template_id: str, template: dict[str, Any]
    ) -> ApiResult[Any]:
        """POST /emails/builder/data (always saved with the html editor)."""
        payload = {
            "locationId": self.location_id,
            "templateId": template_id,
            **compact(template),
            "editorType": "html",
        }
        return await self._call("POST", "/emails/builder/data", json=payload)

    async def delete_email_template(self, template_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", f"/emails/builder/{self.location_id}/{template_id}")

    async def verify_email(self, location_id: str, verification: dict[str, Any]) -> ApiResult[Any]:
        """
        POST /email/verify.

        Args:
            location_id: Location whose verification credits are charged
            verification: ``{"type": "email" | "contact", "verify": <address or contact ID>}``
        """
        return await self._call(
            "POST", "/email/verify", params={"locationId": location_id}, json=verification
        )
