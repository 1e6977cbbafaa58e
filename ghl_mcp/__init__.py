"""
ghl-mcp - GoHighLevel CRM client and MCP tool modules.

ghl-mcp gives agents typed access to a GoHighLevel sub-account:

- **API Client**: One async client per access token covering contacts,
  conversations, opportunities, calendars, locations, email, media,
  custom objects, workflows, store, products, payments and invoices
- **Tool Modules**: Per-domain MCP tool catalogs with a dispatcher
- **Registry / Factory**: Assemble every module around a shared client

Quick Start:
    >>> from ghl_mcp import HighLevelClient, HighLevelConfig, ContactTools
    >>>
    >>> client = HighLevelClient(HighLevelConfig(access_token="pit-xxx", location_id="loc_1"))
    >>> contacts = ContactTools(client)
    >>> result = await contacts.execute_tool("search_contacts", {"query": "ada"})
"""

__version__ = "0.1.0"

from ghl_mcp.config import HighLevelSettings, configure_logging, get_settings
from ghl_mcp.integrations.base import ApiResult, ErrorPolicy, IntegrationError
from ghl_mcp.integrations.highlevel import HighLevelClient, HighLevelConfig
from ghl_mcp.tools import (
    ContactTools,
    ConversationTools,
    EmailTools,
    EmailVerificationTools,
    HighLevelToolFactory,
    LocationTools,
    MediaTools,
    OpportunityTools,
    ToolContext,
    ToolRegistry,
    WorkflowTools,
)

__all__ = [
    # Version
    "__version__",
    # Client
    "HighLevelClient",
    "HighLevelConfig",
    "ApiResult",
    "ErrorPolicy",
    "IntegrationError",
    # Config
    "HighLevelSettings",
    "configure_logging",
    "get_settings",
    # Tools
    "ContactTools",
    "ConversationTools",
    "OpportunityTools",
    "LocationTools",
    "EmailTools",
    "EmailVerificationTools",
    "MediaTools",
    "WorkflowTools",
    "HighLevelToolFactory",
    "ToolContext",
    "ToolRegistry",
]
