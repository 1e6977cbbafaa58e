"""
HighLevel Integration for ghl-mcp.

GoHighLevel is a CRM and marketing platform for agencies. This
integration provides async access to contacts, conversations,
opportunities, calendars, locations, email, media, custom objects,
workflows, store, products, payments and invoices.

Usage:
    from ghl_mcp.integrations.highlevel import HighLevelClient, HighLevelConfig

    client = HighLevelClient(HighLevelConfig(
        access_token="pit-xxx",
        location_id="loc_123",
    ))

    result = await client.get_contact("contact_123")
    contact = result.data

Note:
    Conversation and messaging endpoints are called with API version
    2021-04-15; everything else uses the configured version.
"""

from ghl_mcp.integrations.highlevel.client import HighLevelClient
from ghl_mcp.integrations.highlevel.core import (
    CONVERSATIONS_API_VERSION,
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    HighLevelConfig,
)

__all__ = [
    "CONVERSATIONS_API_VERSION",
    "DEFAULT_API_VERSION",
    "DEFAULT_BASE_URL",
    "HighLevelClient",
    "HighLevelConfig",
]
