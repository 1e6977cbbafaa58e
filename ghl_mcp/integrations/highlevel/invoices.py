"""
Invoices API.

Invoice templates, recurring schedules, invoices, text2pay, estimates
and estimate templates. All requests are scoped with
``altType=location``; list endpoints page with ``limit`` 10 and
``offset`` 0 unless told otherwise.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.integrations.base import ApiResult, compact
from ghl_mcp.integrations.highlevel.core import HighLevelCore

DEFAULT_PAGE_LIMIT = "10"
DEFAULT_PAGE_OFFSET = "0"


class InvoicesAPI(HighLevelCore):
    """Endpoints under /invoices."""

    def _scope(self, alt_id: str | None = None) -> dict[str, Any]:
        return self._with_alt({"altId": alt_id})

    def _page(self, params: dict[str, Any] | None) -> dict[str, Any]:
        """Listing query: alt scope, paging defaults, set filters only."""
        params = dict(params or {})
        params["limit"] = params.get("limit") or DEFAULT_PAGE_LIMIT
        params["offset"] = params.get("offset") or DEFAULT_PAGE_OFFSET
        return compact(self._with_alt(params))

    # =========================================================================
    # Templates
    # =========================================================================

    async def create_invoice_template(self, template: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/invoices/template", json=self._with_alt(template))

    async def list_invoice_templates(
        self, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        """
        GET /invoices/template.

        Filters: ``status``, ``startAt``, ``endAt``, ``search``, ``paymentMode``.
        """
        return await self._call("GET", "/invoices/template", params=self._page(params))

    async def get_invoice_template(
        self, template_id: str, alt_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/invoices/template/{template_id}", params=self._scope(alt_id)
        )

    async def update_invoice_template(
        self, template_id: str, template: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/invoices/template/{template_id}", json=self._with_alt(template)
        )

    async def delete_invoice_template(
        self, template_id: str, alt_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/invoices/template/{template_id}", params=self._scope(alt_id)
        )

    async def update_invoice_template_late_fees_configuration(
        self, template_id: str, config: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PATCH",
            f"/invoices/template/{template_id}/late-fees-configuration",
            json=self._with_alt(config),
        )

    async def update_invoice_template_payment_methods_configuration(
        self, template_id: str, config: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PATCH",
            f"/invoices/template/{template_id}/payment-methods-configuration",
            json=self._with_alt(config),
        )

    # =========================================================================
    # Schedules
    # =========================================================================

    async def create_invoice_schedule(self, schedule: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/invoices/schedule", json=self._with_alt(schedule))

    async def list_invoice_schedules(
        self, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call("GET", "/invoices/schedule", params=self._page(params))

    async def get_invoice_schedule(
        self, schedule_id: str, alt_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "GET", f"/invoices/schedule/{schedule_id}", params=self._scope(alt_id)
        )

    async def update_invoice_schedule(
        self, schedule_id: str, schedule: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/invoices/schedule/{schedule_id}", json=self._with_alt(schedule)
        )

    async def delete_invoice_schedule(
        self, schedule_id: str, alt_id: str | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/invoices/schedule/{schedule_id}", params=self._scope(alt_id)
        )

    async def update_and_schedule_invoice_schedule(self, schedule_id: str) -> ApiResult[Any]:
        return await self._call("POST", f"/invoices/schedule/{schedule_id}/updateAndSchedule")

    async def schedule_invoice_schedule(
        self, schedule_id: str, schedule: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/invoices/schedule/{schedule_id}/schedule", json=self._with_alt(schedule)
        )

    async def auto_payment_invoice_schedule(
        self, schedule_id: str, payment: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST",
            f"/invoices/schedule/{schedule_id}/auto-payment",
            json=self._with_alt(payment),
        )

    async def cancel_invoice_schedule(
        self, schedule_id: str, cancel: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/invoices/schedule/{schedule_id}/cancel", json=self._with_alt(cancel)
        )

    # =========================================================================
    # Invoices
    # =========================================================================

    async def create_invoice(self, invoice: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/invoices/", json=self._with_alt(invoice))

    async def list_invoices(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        """GET /invoices/ (status, date range, search, paymentMode, contactId, sorting)."""
        return await self._call("GET", "/invoices/", params=self._page(params))

    async def get_invoice(self, invoice_id: str, alt_id: str | None = None) -> ApiResult[Any]:
        return await self._call("GET", f"/invoices/{invoice_id}", params=self._scope(alt_id))

    async def update_invoice(self, invoice_id: str, invoice: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PUT", f"/invoices/{invoice_id}", json=self._with_alt(invoice))

    async def delete_invoice(self, invoice_id: str, alt_id: str | None = None) -> ApiResult[Any]:
        return await self._call("DELETE", f"/invoices/{invoice_id}", params=self._scope(alt_id))

    async def update_invoice_late_fees_configuration(
        self, invoice_id: str, config: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PATCH",
            f"/invoices/{invoice_id}/late-fees-configuration",
            json=self._with_alt(config),
        )

    async def void_invoice(
        self, invoice_id: str, void: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/invoices/{invoice_id}/void", json=self._with_alt(void)
        )

    async def send_invoice(self, invoice_id: str, send: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/invoices/{invoice_id}/send", json=self._with_alt(send)
        )

    async def record_invoice_payment(
        self, invoice_id: str, payment: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/invoices/{invoice_id}/record-payment", json=self._with_alt(payment)
        )

    async def update_invoice_last_visited_at(self, stats: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PATCH", "/invoices/stats/last-visited-at", json=stats)

    async def text2pay_invoice(self, invoice: dict[str, Any]) -> ApiResult[Any]:
        """POST /invoices/text2pay (create and send in one step)."""
        return await self._call("POST", "/invoices/text2pay", json=self._with_alt(invoice))

    async def generate_invoice_number(self, alt_id: str | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", "/invoices/generate-invoice-number", params=self._scope(alt_id)
        )

    # =========================================================================
    # Estimates
    # =========================================================================

    async def create_estimate(self, estimate: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("POST", "/invoices/estimate", json=self._with_alt(estimate))

    async def update_estimate(self, estimate_id: str, estimate: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/invoices/estimate/{estimate_id}", json=self._with_alt(estimate)
        )

    async def delete_estimate(
        self, estimate_id: str, delete: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/invoices/estimate/{estimate_id}", json=self._with_alt(delete)
        )

    async def generate_estimate_number(self, alt_id: str | None = None) -> ApiResult[Any]:
        return await self._call(
            "GET", "/invoices/estimate/number/generate", params=self._scope(alt_id)
        )

    async def send_estimate(self, estimate_id: str, send: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/invoices/estimate/{estimate_id}/send", json=self._with_alt(send)
        )

    async def create_invoice_from_estimate(
        self, estimate_id: str, invoice: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "POST", f"/invoices/estimate/{estimate_id}/invoice", json=self._with_alt(invoice)
        )

    async def list_estimates(self, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return await self._call("GET", "/invoices/estimate/list", params=self._page(params))

    async def update_estimate_last_visited_at(self, stats: dict[str, Any]) -> ApiResult[Any]:
        return await self._call("PATCH", "/invoices/estimate/stats/last-visited-at", json=stats)

    # =========================================================================
    # Estimate templates
    # =========================================================================

    async def list_estimate_templates(
        self, params: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call("GET", "/invoices/estimate/template", params=self._page(params))

    async def create_estimate_template(self, template: dict[str, Any]) -> ApiResult[Any]:
        return await self._call(
            "POST", "/invoices/estimate/template", json=self._with_alt(template)
        )

    async def update_estimate_template(
        self, template_id: str, template: dict[str, Any]
    ) -> ApiResult[Any]:
        return await self._call(
            "PUT", f"/invoices/estimate/template/{template_id}", json=self._with_alt(template)
        )

    async def delete_estimate_template(
        self, template_id: str, delete: dict[str, Any] | None = None
    ) -> ApiResult[Any]:
        return await self._call(
            "DELETE", f"/invoices/estimate/template/{template_id}", json=self._with_alt(delete)
        )

    async def preview_estimate_template(
        self, template_id: str, alt_id: str | None = None
    ) -> ApiResult[Any]:
        params = {**self._scope(alt_id), "templateId": template_id}
        return await self._call("GET", "/invoices/estimate/template/preview", params=params)
