"""
Configuration management for the Shopify RSS API.
"""

from typing import Optional, Tuple
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


DEFAULT_FEED_TITLE = "Store Products"
DEFAULT_FEED_DESCRIPTION = "All products in our store"
DEFAULT_FEED_LANGUAGE = "tr"


class ConfigurationMissing(Exception):
    """Raised when the shop domain or access token is not configured."""

    def __init__(self, missing: Tuple[str, ...]):
        self.missing = missing
        super().__init__(f"Missing configuration: {', '.join(missing)}")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    shopify_shop_domain: Optional[str] = Field(default=None)
    shopify_access_token: Optional[str] = Field(default=None)
    shopify_api_version: str = Field(default="2023-10")

    rss_title: str = Field(default=DEFAULT_FEED_TITLE)
    rss_description: str = Field(default=DEFAULT_FEED_DESCRIPTION)
    rss_language: str = Field(default=DEFAULT_FEED_LANGUAGE)

    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")

    @property
    def shop_link(self) -> str:
        """Public storefront base URL used for item links."""
        domain = (self.shopify_shop_domain or "").strip().rstrip("/")
        return f"https://{domain}"


def get_settings() -> Settings:
    """
    Get application settings.

    A fresh instance is built on every call so each request sees the
    current environment.
    """
    return Settings()


def require_shop_credentials(settings: Settings) -> Tuple[str, str]:
    """
    Return (shop_domain, access_token) or raise if either is unset.

    Raises:
        ConfigurationMissing: If the domain or token is empty.
    """
    missing = []
    if not settings.shopify_shop_domain:
        missing.append("SHOPIFY_SHOP_DOMAIN")
    if not settings.shopify_access_token:
        missing.append("SHOPIFY_ACCESS_TOKEN")

    if missing:
        raise ConfigurationMissing(tuple(missing))

    return settings.shopify_shop_domain, settings.shopify_access_token
