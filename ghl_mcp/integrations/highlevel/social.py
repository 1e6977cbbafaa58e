"""
Social media posting API.

All endpoints are scoped to the configured location:
/social-media-posting/{locationId}/...
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class SocialMediaAPI(HighLevelCore):
    """Endpoints under /social-media-posting."""

    def _social_path(self, suffix: str) -> str:
        return f"/social-media-posting/{self.location_id}{suffix}"

    # =========================================================================
    # Posts
    # =========================================================================

    async def search_social_posts(self, search: dict[str, Any] | None = None) -> ApiResult[Any]:
        """POST .../posts/list (``type``, ``accounts``, ``skip``, ``limit``, date range)."""
        return await self._call("POST", self._social_path("/posts/list"), json=compact(search))

    async def create_social_post(self, post: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", self._social_path("/posts"), json=post)

    async def get_social_post(self, post_id: str) -> ApiResult[Any]:
        return await self._call("GET", self._social_path(f"/posts/{post_id}"))

    async def update_social_post(self, post_id: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", self._social_path(f"/posts/{post_id}"), json=updates)

    async def delete_social_post(self, post_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", self._social_path(f"/posts/{post_id}"))

    async def bulk_delete_social_posts(self, post_ids: list[str]) -> ApiResult[Any]:
        return await self._call(
            "POST", self._social_path("/posts/bulk-delete"), json={"postIds": post_ids}
        )

    # =========================================================================
    # Accounts
    # =========================================================================

    async def get_social_accounts(self) -> ApiResult[Any]:
        return await self._call("GET", self._social_path("/accounts"))

    async def delete_social_account(
        self,
        account_id: str,
        company_id: str | None = None,
        user_id: str | None = None,
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            self._social_path(f"/accounts/{account_id}"),
            params=compact({"companyId": company_id, "userId": user_id}),
        )

    # =========================================================================
    # CSV bulk scheduling
    # =========================================================================

    async def upload_social_csv(self, upload: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", self._social_path("/csv"), json=upload)

    async def get_social_csv_upload_status(
        self,
        skip: int | None = None,
        limit: int | None = None,
        include_users: bool | None = None,
        user_id: str | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {"skip": skip, "limit": limit, "includeUsers": include_users, "userId": user_id}
        )
        return await self._call("GET", self._social_path("/csv"), params=params)

    async def set_social_csv_accounts(self, accounts: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", self._social_path("/set-accounts"), json=accounts)

    async def get_social_csv_posts(
        self, csv_id: str, skip: int | None = None, limit: int | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            self._social_path(f"/csv/{csv_id}"),
            params=compact({"skip": skip, "limit": limit}),
        )

    async def finalize_social_csv(self, csv_id: str, finalize: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PATCH", self._social_path(f"/csv/{csv_id}"), json=finalize)

    async def delete_social_csv(self, csv_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", self._social_path(f"/csv/{csv_id}"))

    async def delete_social_csv_post(self, csv_id: str, post_id: str) -> ApiResult[Any]:
        return await self._call("DELETE", self._social_path(f"/csv/{csv_id}/post/{post_id}"))
