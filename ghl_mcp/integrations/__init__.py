"""
ghl-mcp Integrations Layer.

Clients for the external APIs the tool modules talk to. The shared base
provides the HTTP client lifecycle, authentication headers, central
error translation and the ApiResult envelope.

Directory Structure:
    integrations/
    ├── base.py           # IntegrationClient, errors, ApiResult
    └── highlevel/        # GoHighLevel API
        ├── core.py       # HighLevelConfig, HighLevelCore
        ├── contacts.py   # one mixin per endpoint family
        ├── ...
        └── client.py     # HighLevelClient

Usage:
    from ghl_mcp.integrations.highlevel import HighLevelClient, HighLevelConfig

    async with HighLevelClient(HighLevelConfig(access_token="...", location_id="...")) as client:
        result = await client.search_contacts(query="ada")
"""

from ghl_mcp.integrations.base import (
    ApiError,
    ApiResult,
    AuthenticationError,
    ErrorPolicy,
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

__all__ = [
    "ApiError",
    "ApiResult",
    "AuthenticationError",
    "ErrorPolicy",
    "IntegrationClient",
    "IntegrationConfig",
    "IntegrationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
]
