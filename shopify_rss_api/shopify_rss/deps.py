"""
Dependency injection for FastAPI.
"""

from typing import AsyncIterator, Optional
import httpx
from fastapi import Depends

from shopify_rss.config import Settings, get_settings, require_shop_credentials
from shopify_rss.core.shopify_client import ShopifyClient
from shopify_rss.core.feed.models import FeedConfig


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound Shopify calls; None means httpx's default."""
    return None


async def get_shopify_client(
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport)
) -> AsyncIterator[ShopifyClient]:
    """
    Create a ShopifyClient for the current request and close it afterwards.

    Raises:
        ConfigurationMissing: If domain or token is unset (before any client is built).
    """
    shop_domain, access_token = require_shop_credentials(settings)

    client = ShopifyClient(
        shop_domain=shop_domain,
        access_token=access_token,
        api_version=settings.shopify_api_version,
        transport=transport
    )
    try:
        yield client
    finally:
        await client.close()


def build_feed_config(settings: Settings) -> FeedConfig:
    """Channel settings for the feed, derived from process configuration."""
    return FeedConfig(
        title=settings.rss_title,
        description=settings.rss_description,
        link=settings.shop_link,
        language=settings.rss_language
    )
