"""Blogs API: sites, posts, authors, categories and slug checks."""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class BlogsAPI(HighLevelCore):
    """Endpoints under /blogs."""

    async def get_blog_sites(
        self,
        *,
        location_id: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
        search_term: str | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "locationId": self._loc(location_id),
                "skip": skip,
                "limit": limit,
                "searchTerm": search_term,
            }
        )
        return await self._call("GET", "/blogs/site/all", params=params)

    async def get_blog_posts(
        self,
        blog_id: str,
        *,
        location_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        search_term: str | None = None,
        status: str | None = None,
    ) -> ApiResult[Any]:
        params = compact(
            {
                "locationId": self._loc(location_id),
                "blogId": blog_id,
                "limit": limit,
                "offset": offset,
                "searchTerm": search_term,
                "status": status,
            }
        )
        return await self._call("GET", "/blogs/posts/all", params=params)

    async def create_blog_post(self, post: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/blogs/posts", json=self._with_location(post))

    async def update_blog_post(self, post_id: str, post: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/blogs/posts/{post_id}", json=self._with_location(post))

    async def get_blog_authors(
        self,
        *,
        location_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> ApiResult[Any]:
        params = compact({"locationId": self._loc(location_id), "limit": limit, "offset": offset})
        return await self._call("GET", "/blogs/authors", params=params)

    async def get_blog_categories(
        self,
        *,
        location_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> ApiResult[Any]:
        params = compact({"locationId": self._loc(location_id), "limit": limit, "offset": offset})
        return await self._call("GET", "/blogs/categories", params=params)

    async def check_url_slug_exists(
        self,
        url_slug: str,
        *,
        location_id: str | None = None,
        post_id: str | None = None,
    ) -> ApiResult[Any]:
        """GET /blogs/posts/url-slug-exists (``postId`` excludes the post being edited)."""
        params = compact(
            {"locationId": self._loc(location_id), "urlSlug": url_slug, "postId": post_id}
        )
        return await self._call("GET", "/blogs/posts/url-slug-exists", params=params)
