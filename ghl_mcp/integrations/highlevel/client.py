"""
HighLevel API Client.

One async client for the GoHighLevel (LeadConnector) REST API, assembled
from the endpoint-family mixins. Every method performs exactly one HTTP
round trip and returns an ApiResult.

Usage:
    async with HighLevelClient(config) as client:
        # Create contact (locationId defaults to config.location_id)
        result = await client.create_contact({"firstName": "Ada", "email": "ada@example.com"})

        # Search opportunities
        result = await client.search_opportunities({"q": "renewal", "limit": 20})

        # Send an SMS
        result = await client.send_sms(contact_id="...", message="Hi!")

API Reference:
    https://highlevel.stoplight.io/docs/integrations
"""

from __future__ import annotations

from ghl_mcp.integrations.highlevel.blogs import BlogsAPI
from ghl_mcp.integrations.highlevel.calendars import CalendarsAPI
from ghl_mcp.integrations.highlevel.contacts import ContactsAPI
from ghl_mcp.integrations.highlevel.conversations import ConversationsAPI
from ghl_mcp.integrations.highlevel.core import HighLevelConfig, HighLevelCore
from ghl_mcp.integrations.highlevel.emails import EmailsAPI
from ghl_mcp.integrations.highlevel.invoices import InvoicesAPI
from ghl_mcp.integrations.highlevel.locations import LocationsAPI
from ghl_mcp.integrations.highlevel.media import MediaAPI
from ghl_mcp.integrations.highlevel.objects import ObjectsAPI
from ghl_mcp.integrations.highlevel.opportunities import OpportunitiesAPI
from ghl_mcp.integrations.highlevel.payments import PaymentsAPI
from ghl_mcp.integrations.highlevel.products import ProductsAPI
from ghl_mcp.integrations.highlevel.social import SocialMediaAPI
from ghl_mcp.integrations.highlevel.store import StoreAPI
from ghl_mcp.integrations.highlevel.workflows import WorkflowsAPI


class HighLevelClient(
    ContactsAPI,
    ConversationsAPI,
    BlogsAPI,
    OpportunitiesAPI,
    CalendarsAPI,
    EmailsAPI,
    LocationsAPI,
    SocialMediaAPI,
    MediaAPI,
    ObjectsAPI,
    WorkflowsAPI,
    StoreAPI,
    ProductsAPI,
    PaymentsAPI,
    InvoicesAPI,
    HighLevelCore,
):
    """
    Async client for the HighLevel API.

    Shared state is limited to the configuration and the underlying
    httpx.AsyncClient; concurrent calls are independent.
    """

    def __init__(self, config: HighLevelConfig):
        super().__init__(config)


__all__ = ["HighLevelClient", "HighLevelConfig"]
