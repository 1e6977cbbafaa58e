"""
Store API: shipping zones, shipping rates, carriers and store settings.

Every request is scoped with ``altType=location`` and ``altId`` (the
configured location unless the caller passes one), in the body for
writes and in the query string for reads and deletes.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore


class StoreAPI(HighLevelCore):
    """Endpoints under /store."""

    def _alt_query(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return compact(self._with_alt(params))

    # =========================================================================
    # Shipping zones
    # =========================================================================

    async def create_shipping_zone(self, zone: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/store/shipping-zone", json=self._with_alt(zone))

    async def list_shipping_zones(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        """GET /store/shipping-zone (``limit``, ``offset``, ``withShippingRate``)."""
        return await self._call("GET", "/store/shipping-zone", params=self._alt_query(params))

    async def get_shipping_zone(
        self, zone_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/store/shipping-zone/{zone_id}", params=self._alt_query(params)
        )

    async def update_shipping_zone(self, zone_id: str, updates: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/store/shipping-zone/{zone_id}", json=self._with_alt(updates)
        )

    async def delete_shipping_zone(
        self, zone_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/store/shipping-zone/{zone_id}", params=self._alt_query(params)
        )

    # =========================================================================
    # Shipping rates
    # =========================================================================

    async def get_available_shipping_rates(self, order: dict[str, Any]) -> ApiResult[Any]:
        """POST /store/shipping-zone/shipping-rates (rates for a destination and cart)."""
        return await self._call(
            "POST", "/store/shipping-zone/shipping-rates", json=self._with_alt(order)
        )

    async def create_shipping_rate(self, zone_id: str, rate: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/store/shipping-zone/{zone_id}/shipping-rate", json=self._with_alt(rate)
        )

    async def list_shipping_rates(
        self, zone_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/store/shipping-zone/{zone_id}/shipping-rate",
            params=self._alt_query(params),
        )

    async def get_shipping_rate(
        self, zone_id: str, rate_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/store/shipping-zone/{zone_id}/shipping-rate/{rate_id}",
            params=self._alt_query(params),
        )

    async def update_shipping_rate(
        self, zone_id: str, rate_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT",
            f"/store/shipping-zone/{zone_id}/shipping-rate/{rate_id}",
            json=self._with_alt(updates),
        )

    async def delete_shipping_rate(
        self, zone_id: str, rate_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE",
            f"/store/shipping-zone/{zone_id}/shipping-rate/{rate_id}",
            params=self._alt_query(params),
        )

    # =========================================================================
    # Carriers
    # =========================================================================

    async def create_shipping_carrier(self, carrier: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/store/shipping-carrier", json=self._with_alt(carrier))

    async def list_shipping_carriers(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", "/store/shipping-carrier", params=self._alt_query(params)
        )

    async def get_shipping_carrier(
        self, carrier_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/store/shipping-carrier/{carrier_id}", params=self._alt_query(params)
        )

    async def update_shipping_carrier(
        self, carrier_id: str, updates: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/store/shipping-carrier/{carrier_id}", json=self._with_alt(updates)
        )

    async def delete_shipping_carrier(
        self, carrier_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/store/shipping-carrier/{carrier_id}", params=self._alt_query(params)
        )

    # =========================================================================
    # Settings
    # =========================================================================

    async def create_store_setting(self, setting: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/store/store-setting", json=self._with_alt(setting))

    async def get_store_setting(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/store/store-setting", params=self._alt_query(params))
