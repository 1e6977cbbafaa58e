"""
HighLevel Tool Factory.

Builds the tool modules around a HighLevelClient, either from process
settings (single-tenant server) or per-request from a ToolContext that
carries the caller's own credentials.

Usage:
    # Single tenant: credentials from GHL_* environment variables
    factory = HighLevelToolFactory()
    registry = factory.build_registry()

    # Per request: credentials from the caller
    context = ToolContext(
        user_id="user-123",
        secrets={"ghl_api_key": "pit-xxx", "ghl_location_id": "loc_123"},
    )
    tools = factory.build_tools(context)
    ...
    await HighLevelToolFactory.close_tools(tools)

Secret Keys:
    The factory looks for these keys in ToolContext.secrets:
    - ghl_api_key: HighLevel access token (required)
    - ghl_location_id: Default location (optional, falls back to settings)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ghl_mcp.config import get_settings
from ghl_mcp.integrations.highlevel import HighLevelClient, HighLevelConfig

from .contacts import ContactTools
from .conversations import ConversationTools
from .email import EmailTools
from .email_verification import EmailVerificationTools
from .locations import LocationTools
from .media import MediaTools
from .opportunities import OpportunityTools
from .registry import ToolRegistry
from .workflows import WorkflowTools

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ghl_mcp.config import HighLevelSettings

    from .base import Tool
    from .module import ToolModule

logger = logging.getLogger(__name__)


# Secret key names
GHL_API_KEY = "ghl_api_key"
GHL_LOCATION_ID = "ghl_location_id"

ALL_MODULES: tuple[type[ToolModule], ...] = (
    ContactTools,
    ConversationTools,
    OpportunityTools,
    LocationTools,
    EmailTools,
    EmailVerificationTools,
    MediaTools,
    WorkflowTools,
)


# =============================================================================
# Tool Context
# =============================================================================


@dataclass(frozen=True)
class ToolContext:
    """
    Per-request context for building tools.

    Attributes:
        user_id: Caller or tenant identifier (used for logging)
        secrets: Credential map (e.g., {"ghl_api_key": "..."})
        metadata: Additional request context
    """

    user_id: str
    secrets: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def get_secret(self, key: str, default: str | None = None) -> str | None:
        """Get a secret by key."""
        return self.secrets.get(key, default)

    def require_secret(self, key: str) -> str:
        """
        Get a required secret, raising if not present.

        Raises:
            KeyError: If secret is not present
        """
        if key not in self.secrets:
            raise KeyError(f"Required secret '{key}' not found in ToolContext")
        return self.secrets[key]


# =============================================================================
# Factory
# =============================================================================


@dataclass
class HighLevelToolFactory:
    """
    Factory for HighLevel tool modules.

    All modules built in one call share a single client, so they share
    one connection pool and one token. ``modules`` restricts which
    module classes are built (all of them by default).

    Example:
        factory = HighLevelToolFactory(modules=(ContactTools, OpportunityTools))
        for module in factory.build_modules():
            print(module.module_name, module.tool_names())
    """

    settings: HighLevelSettings | None = None
    modules: Sequence[type[ToolModule]] = ALL_MODULES

    def _settings(self) -> HighLevelSettings:
        return self.settings or get_settings()

    def build_client(self, context: ToolContext | None = None) -> HighLevelClient | None:
        """
        Build a client from the context secrets or, failing that, settings.

        Returns:
            The client, or None when no access token is available
        """
        settings = self._settings()

        if context is not None:
            api_key = context.get_secret(GHL_API_KEY)
            if not api_key:
                return None
            return HighLevelClient(
                HighLevelConfig(
                    access_token=api_key,
                    base_url=settings.base_url,
                    timeout=settings.timeout,
                    version=settings.api_version,
                    location_id=context.get_secret(GHL_LOCATION_ID) or settings.location_id,
                )
            )

        if not settings.is_configured:
            return None
        return HighLevelClient(settings.to_client_config())

    def build_modules(self, client: HighLevelClient | None = None) -> list[ToolModule]:
        """
        Instantiate every configured module around one client.

        Raises:
            ValueError: If no client is given and no access token is configured
        """
        if client is None:
            client = self.build_client()
            if client is None:
                raise ValueError("HighLevel access token is required (set GHL_API_KEY)")

        modules = [module_cls(client) for module_cls in self.modules]
        logger.debug(f"[tool_factory] Built {len(modules)} tool modules")
        return modules

    def build_registry(self, client: HighLevelClient | None = None) -> ToolRegistry:
        """Build a registry holding every tool of every configured module."""
        registry = ToolRegistry()
        for module in self.build_modules(client):
            registry.register_module(module)
        logger.info(f"[tool_factory] Registry ready with {len(registry)} tools")
        return registry

    def build_tools(self, context: ToolContext) -> Sequence[Tool]:
        """
        Build tools for the given context.

        The tools share one new HighLevelClient that the caller owns;
        release it with ``close_tools`` once the request is done.

        Returns:
            Tools configured with the caller's credentials, or an empty
            tuple when the context carries no access token
        """
        client = self.build_client(context)
        if client is None:
            logger.warning(
                f"[tool_factory] No API key for user {context.user_id}, returning empty tools"
            )
            return ()

        tools: list[Tool] = []
        for module in self.build_modules(client):
            tools.extend(module.as_tools())

        logger.debug(f"[tool_factory] Built {len(tools)} tools for user {context.user_id}")
        return tuple(tools)

    @staticmethod
    async def close_tools(tools: Sequence[Tool]) -> int:
        """
        Close the HighLevel clients behind ``tools``.

        Returns:
            Number of distinct clients closed
        """
        clients: dict[int, HighLevelClient] = {}
        for tool in tools:
            client = getattr(tool, "client", None)
            if isinstance(client, HighLevelClient):
                clients.setdefault(id(client), client)

        for client in clients.values():
            await client.close()
        logger.debug(f"[tool_factory] Closed {len(clients)} HighLevel clients")
        return len(clients)
