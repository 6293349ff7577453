"""
Configuration Management
Environment-based configuration for the gateway, read once at startup
"""

import logging
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class GatewayConfig(BaseSettings):
    """Gateway Configuration"""

    # Backend API the wildcard proxy forwards to
    backend_api_url: str = Field(
        default="http://localhost:3001",
        validation_alias="BACKEND_API_URL",
    )
    # Static bearer credential attached to every forwarded request
    api_token: str = Field(
        default="",
        validation_alias="NEXT_PUBLIC_API_TOKEN",
    )

    # Outbound deadlines (seconds)
    raw_fetch_timeout_seconds: float = 15.0
    upstream_timeout_seconds: float = 30.0

    # External resources
    pastebin_base_url: str = "https://pastebin.com/raw"

    # CORS
    cors_allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_format: str = "default"
    logging_config_path: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("raw_fetch_timeout_seconds", "upstream_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("Timeouts must be greater than zero")
        return v

    @field_validator("backend_api_url", "pastebin_base_url")
    @classmethod
    def validate_base_url(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URLs must start with http:// or https://")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("default", "detailed", "json"):
            raise ValueError("log_format must be one of: default, detailed, json")
        return v

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"Backend API: {self.backend_api_url}")
        logger.info(f"API token: {'set' if self.api_token else 'empty'}")
        logger.info(
            f"Timeouts: raw fetch {self.raw_fetch_timeout_seconds}s, "
            f"upstream {self.upstream_timeout_seconds}s"
        )
        logger.info(f"Pastebin: {self.pastebin_base_url}")


# Global configuration instance
_gateway_config: Optional[GatewayConfig] = None


def get_gateway_config() -> GatewayConfig:
    """Get gateway configuration instance"""
    global _gateway_config
    if _gateway_config is None:
        _gateway_config = GatewayConfig()
    return _gateway_config
