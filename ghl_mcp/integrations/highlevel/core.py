"""
HighLevel client core.

Owns the configuration, authentication, API-version header selection and
error formatting shared by every endpoint family. The endpoint families
(contacts, conversations, ...) are mixins built on HighLevelCore and
combined into HighLevelClient.

Headers:
    Authorization: Bearer <access token>
    Version: <config.version> (2021-07-28 by default)
    Version: 2021-04-15 for conversation/messaging endpoints
    Accept / Content-Type: application/json

Errors:
    Every failure is raised as an IntegrationError subtype whose message
    reads ``GHL API Error (<status>): <message>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from ghl_mcp.integrations.base import (
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
)

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://services.leadconnectorhq.com"
DEFAULT_API_VERSION = "2021-07-28"
CONVERSATIONS_API_VERSION = "2021-04-15"


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class HighLevelConfig(IntegrationConfig):
    """Configuration for the HighLevel client."""

    # Optional - defaults to the LeadConnector API host
    base_url: str = DEFAULT_BASE_URL

    # Primary API version header
    version: str = DEFAULT_API_VERSION

    # Default sub-account used when a call omits locationId
    location_id: str = ""

    def __post_init__(self):
        """Validate configuration."""
        if not self.access_token:
            raise ValueError("HighLevel access token is required")
        if not self.base_url:
            raise ValueError("HighLevel base URL is required")


# =============================================================================
# Core
# =============================================================================


class HighLevelCore(IntegrationClient):
    """
    Shared plumbing for the HighLevel endpoint families.

    Besides the IntegrationClient contract this provides:
    - default location substitution (``locationId`` / ``altId``)
    - the conversations API version header
    - token rotation and config snapshots
    - a connection test
    """

    def __init__(self, config: HighLevelConfig):
        """
        Initialize HighLevel client.

        Args:
            config: HighLevel configuration with access token and location
        """
        super().__init__(config)
        self._config: HighLevelConfig = config

    @property
    def name(self) -> str:
        """Integration name."""
        return "highlevel"

    @property
    def location_id(self) -> str:
        """Default location (sub-account) ID."""
        return self._config.location_id

    def _get_auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._config.access_token}"}

    def _get_default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "Version": self._config.version}

    def _format_error(self, status_code: int, message: str) -> str:
        return f"GHL API Error ({status_code}): {message}"

    @staticmethod
    def _conversation_headers() -> dict[str, str]:
        """Per-request headers for the conversations/messaging API."""
        return {"Version": CONVERSATIONS_API_VERSION}

    # -------------------------------------------------------------------------
    # Default location helpers
    # -------------------------------------------------------------------------

    def _loc(self, location_id: str | None = None) -> str:
        return location_id or self._config.location_id

    def _with_location(self, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Copy ``payload`` with ``locationId`` defaulted to the configured location."""
        payload = dict(payload or {})
        payload["locationId"] = payload.get("locationId") or self._config.location_id
        return payload

    def _with_alt(self, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Copy ``payload`` scoped as ``altType=location`` with ``altId`` defaulted."""
        payload = dict(payload or {})
        payload["altId"] = payload.get("altId") or self._config.location_id
        payload["altType"] = "location"
        return payload

    @staticmethod
    def _form_fields(fields: dict[str, Any]) -> list[tuple[str, tuple[str | None, Any]]]:
        """
        Build multipart fields from a mapping.

        Lists become repeated fields; ``(filename, content)`` tuples are
        passed through as file parts; everything else is a plain field.
        """
        parts: list[tuple[str, tuple[str | None, Any]]] = []
        for key, value in fields.items():
            if value is None:
                continue
            values = value if isinstance(value, list) else [value]
            for item in values:
                if isinstance(item, tuple):
                    parts.append((key, item))
                elif isinstance(item, bool):
                    parts.append((key, (None, "true" if item else "false")))
                else:
                    parts.append((key, (None, str(item))))
        return parts

    # -------------------------------------------------------------------------
    # Utilities
    # -------------------------------------------------------------------------

    async def test_connection(self) -> dict[str, Any]:
        """
        Check credentials by fetching the default location.

        Returns:
            ``{"status": "connected", "locationId": ...}``

        Raises:
            IntegrationError: If the location cannot be fetched
        """
        try:
            await self._request("GET", f"/locations/{self._config.location_id}")
        except IntegrationError as e:
            raise IntegrationError(
                f"GHL API connection test failed: {e}",
                self.name,
                status_code=e.status_code,
                response_body=e.response_body,
            ) from e
        return {"status": "connected", "locationId": self._config.location_id}

    async def health_check(self) -> bool:
        """Check if HighLevel is reachable with the configured token."""
        try:
            await self.test_connection()
            return True
        except IntegrationError:
            return False

    def update_access_token(self, access_token: str) -> None:
        """
        Rotate the bearer token.

        The configuration is replaced (it stays immutable) and the live
        HTTP client's Authorization header is updated for later requests.
        Requests already in flight keep the token they were sent with.
        """
        self._config = replace(self._config, access_token=access_token)
        self.config = self._config
        if self._client is not None and not self._client.is_closed:
            self._client.headers["Authorization"] = f"Bearer {access_token}"
        logger.info(f"[{self.name}] Access token updated")

    def get_config(self) -> HighLevelConfig:
        """Return the current configuration snapshot."""
        return self._config
