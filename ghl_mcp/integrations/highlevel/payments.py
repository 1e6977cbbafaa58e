"""
Payments API.

White-label integration providers, orders and fulfillments,
transactions, subscriptions, coupons and custom payment providers.
Query strings here pass every set parameter through, stringified.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult
from ghl_mcp.integrations.highlevel.core import HighLevelCore


def _query(params: dict[str, Any] | None, *exclude: str) -> dict[str, str]:
    """Stringify every non-None parameter, skipping path-bound keys."""
    query: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or key in exclude:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


class PaymentsAPI(HighLevelCore):
    """Endpoints under /payments."""

    # =========================================================================
    # Integration providers
    # =========================================================================

    async def create_white_label_integration_provider(
        self, provider: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", "/payments/integrations/provider/whitelabel", json=provider
        )

    async def list_white_label_integration_providers(
        self, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", "/payments/integrations/provider/whitelabel", params=_query(params)
        )

    # =========================================================================
    # Orders
    # =========================================================================

    async def list_orders(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/payments/orders", params=_query(params))

    async def get_order_by_id(
        self, order_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/payments/orders/{order_id}", params=_query(params, "orderId")
        )

    async def create_order_fulfillment(
        self, order_id: str, fulfillment: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/payments/orders/{order_id}/fulfillments", json=fulfillment
        )

    async def list_order_fulfillments(
        self, order_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/payments/orders/{order_id}/fulfillments",
            params=_query(params, "orderId"),
        )

    # =========================================================================
    # Transactions and subscriptions
    # =========================================================================

    async def list_transactions(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/payments/transactions", params=_query(params))

    async def get_transaction_by_id(
        self, transaction_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/payments/transactions/{transaction_id}",
            params=_query(params, "transactionId"),
        )

    async def list_subscriptions(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/payments/subscriptions", params=_query(params))

    async def get_subscription_by_id(
        self, subscription_id: str, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET",
            f"/payments/subscriptions/{subscription_id}",
            params=_query(params, "subscriptionId"),
        )

    # =========================================================================
    # Coupons
    # =========================================================================

    async def list_coupons(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/payments/coupon/list", params=_query(params))

    async def create_coupon(self, coupon: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/payments/coupon", json=coupon)

    async def update_coupon(self, coupon: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", "/payments/coupon", json=coupon)

    async def delete_coupon(self, coupon: dict[str, Any]) -> ApiResult[Any]:
        """DELETE /payments/coupon with ``{altId, altType, id}`` in the body."""
        return await self._call("DELETE", "/payments/coupon", json=coupon)

    async def get_coupon(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/payments/coupon", params=_query(params))

    # =========================================================================
    # Custom providers
    # =========================================================================

    async def create_custom_provider_integration(
        self, location_id: str, provider: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/payments/custom-provider/provider",
            params={"locationId": location_id},
            json=provider,
        )

    async def delete_custom_provider_integration(self, location_id: str) -> ApiResult[Any]:
        return await self._call(
            "DELETE", "/payments/custom-provider/provider", params={"locationId": location_id}
        )

    async def get_custom_provider_config(self, location_id: str) -> ApiResult[Any]:
        return await self._call(
            "GET", "/payments/custom-provider/connect", params={"locationId": location_id}
        )

    async def create_custom_provider_config(
        self, location_id: str, config: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/payments/custom-provider/connect",
            params={"locationId": location_id},
            json=config,
        )

    async def disconnect_custom_provider_config(
        self, location_id: str, disconnect: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST",
            "/payments/custom-provider/disconnect",
            params={"locationId": location_id},
            json=disconnect,
        )
