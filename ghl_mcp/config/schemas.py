"""
ghl-mcp Configuration Schemas

Pydantic models for process-level settings.
Sensitive fields use SecretStr to prevent accidental logging.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

from ghl_mcp.integrations.highlevel.core import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    HighLevelConfig,
)


class HighLevelSettings(BaseModel):
    """
    Settings for the HighLevel tool server.

    Security:
        The access token is a SecretStr. Read it with
        ``settings.api_key.get_secret_value()``; it never appears in
        ``repr()`` or logs.
    """

    # Credentials (private integration token or OAuth access token)
    api_key: SecretStr = Field(default=SecretStr(""), description="HighLevel access token")
    location_id: str = Field(default="", description="Default location (sub-account) ID")

    # API
    base_url: str = Field(default=DEFAULT_BASE_URL, description="HighLevel API base URL")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="Primary API version")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    # Runtime
    log_level: str = "INFO"
    debug: bool = False

    class Config:
        env_prefix = "GHL_"
        case_sensitive = False

    @property
    def is_configured(self) -> bool:
        """True when an access token is present."""
        return bool(self.api_key.get_secret_value())

    def to_client_config(self) -> HighLevelConfig:
        """
        Build the client configuration.

        Raises:
            ValueError: If no access token is configured
        """
        return HighLevelConfig(
            access_token=self.api_key.get_secret_value(),
            base_url=self.base_url,
            timeout=self.timeout,
            version=self.api_version,
            location_id=self.location_id,
        )
