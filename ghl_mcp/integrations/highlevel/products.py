"""
Products API.

Products and prices are scoped by ``locationId``; inventory, store
stats, collections and reviews by ``altId``/``altType=location``.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore

# Query keys of GET /products/ that are passed through unchanged
_PRODUCT_LIST_KEYS = (
    "limit",
    "offset",
    "search",
    "collectionSlug",
    "expand",
    "productIds",
    "storeId",
    "includedInStore",
    "availableInStore",
    "sortOrder",
)


class ProductsAPI(HighLevelCore):
    """Endpoints under /products."""

    # =========================================================================
    # Products
    # =========================================================================

    async def create_product(self, product: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/products/", json=product)

    async def update_product(self, product_id: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/products/{product_id}", json=updates)

    async def get_product(self, product_id: str, location_id: str | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/products/{product_id}", params={"locationId": self._loc(location_id)}
        )

    async def list_products(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        """
        GET /products/.

        ``expand`` and ``productIds`` are sent as repeated query params;
        ``collectionIds`` is comma-joined.
        """
        params = params or {}
        query: dict[str, Any] = {"locationId": self._loc(params.get("locationId"))}
        for key in _PRODUCT_LIST_KEYS:
            query[key] = params.get(key)
        if params.get("collectionIds"):
            query["collectionIds"] = ",".join(params["collectionIds"])
        return await self._call("GET", "/products/", params=compact(query))

    async def delete_product(
        self, product_id: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/products/{product_id}", params={"locationId": self._loc(location_id)}
        )

    async def bulk_update_products(self, update: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/products/bulk-update", json=self._with_alt(update))

    # =========================================================================
    # Prices
    # =========================================================================

    async def create_price(self, product_id: str, price: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/products/{product_id}/price", json=self._with_location(price)
        )

    async def update_price(
        self, product_id: str, price_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT",
            f"/products/{product_id}/price/{price_id}",
            json=self._with_location(updates),
        )

    async def get_price(
        self, product_id: str, price_id: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/products/{product_id}/price/{price_id}",
            params={"locationId": self._loc(location_id)},
        )

    async def list_prices(
        self, product_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        """GET /products/{id}/price (``limit``, ``offset``, comma-separated ``ids``)."""
        return await self._call(
            "GET", f"/products/{product_id}/price", params=compact(self._with_location(params))
        )

    async def delete_price(
        self, product_id: str, price_id: str, location_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/products/{product_id}/price/{price_id}",
            params={"locationId": self._loc(location_id)},
        )

    # =========================================================================
    # Inventory and store
    # =========================================================================

    async def list_inventory(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", "/products/inventory", params=compact(self._with_alt(params))
        )

    async def update_inventory(self, update: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/products/inventory", json=self._with_alt(update))

    async def get_product_store_stats(
        self, store_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/products/store/{store_id}/stats",
            params=compact(self._with_alt(params)),
        )

    async def update_product_store(self, store_id: str, update: dict[str, Any]) -> ApiResult[Any]:
        """POST /products/store/{id} (``action``: include or exclude ``productIds``)."""
        return await self._call("POST", f"/products/store/{store_id}", json=update)

    # =========================================================================
    # Collections
    # =========================================================================

    async def create_product_collection(self, collection: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/products/collections", json=self._with_alt(collection)
        )

    async def update_product_collection(
        self, collection_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/products/collections/{collection_id}", json=self._with_alt(updates)
        )

    async def get_product_collection(self, collection_id: str) -> ApiResult[Any]:
        return await self._call("GET", f"/products/collections/{collection_id}")

    async def list_product_collections(
        self, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", "/products/collections", params=compact(self._with_alt(params))
        )

    async def delete_product_collection(
        self, collection_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/products/collections/{collection_id}",
            params=compact(self._with_alt(params)),
        )

    # =========================================================================
    # Reviews
    # =========================================================================

    async def list_product_reviews(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        """GET /products/reviews (sorting, rating, date range, product/store filters)."""
        return await self._call(
            "GET", "/products/reviews", params=compact(self._with_alt(params))
        )

    async def get_reviews_count(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", "/products/reviews/count", params=compact(self._with_alt(params))
        )

    async def update_product_review(
        self, review_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/products/reviews/{review_id}", json=self._with_alt(updates)
        )

    async def delete_product_review(
        self, review_id: str, product_id: str, alt_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/products/reviews/{review_id}",
            params=self._with_alt({"altId": alt_id, "productId": product_id}),
        )

    async def bulk_update_product_reviews(self, update: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/products/reviews/bulk-update", json=self._with_alt(update)
        )
