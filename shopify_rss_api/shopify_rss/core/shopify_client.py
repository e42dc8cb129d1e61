"""
Shopify Admin REST API client (single-page product reads, no retries).
"""

import logging
from typing import Optional, Dict, List, Any
import httpx

from shopify_rss.core.security import sanitize_string_for_logging
from shopify_rss.core.feed.models import CatalogItem


logger = logging.getLogger(__name__)

PRODUCTS_PAGE_LIMIT = 250


class ShopifyError(Exception):
    """Base exception for Shopify API errors."""
    pass


class ShopifyClient:
    """
    Async Shopify Admin REST API client.

    One instance per request; the caller guarantees that the domain and
    access token are set.
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str = "2023-10",
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Shopify client.

        Args:
            shop_domain: Shop host (e.g., my-shop.myshopify.com)
            access_token: Admin API access token
            api_version: Admin API version segment
            transport: Optional httpx transport (used to stub the upstream in tests)
        """
        self.shop_domain = shop_domain
        self.base_url = f"https://{shop_domain}/admin/api/{api_version}"
        self._access_token = access_token
        self.headers = {
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        }

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            transport=transport
        )

    def _redact(self, text: str) -> str:
        return sanitize_string_for_logging(text, self._access_token)

    async def _get_json(self, endpoint: str, params: Optional[Dict] = None) -> Any:
        """
        Make a single GET request and decode the JSON body.

        Raises:
            ShopifyError: On transport failure, non-2xx status or non-JSON body
        """
        try:
            response = await self.client.get(endpoint, params=params)
        except httpx.HTTPError as e:
            raise ShopifyError(self._redact(f"Request error: {e}")) from e

        if not response.is_success:
            raise ShopifyError(
                self._redact(f"HTTP {response.status_code}: {response.text[:200]}")
            )

        try:
            return response.json()
        except ValueError as e:
            raise ShopifyError(f"Invalid JSON response: {e}") from e

    async def get_raw_products(self) -> List[Dict[str, Any]]:
        """
        Fetch active, published products as raw dicts (first page only).

        Returns:
            Product dicts in upstream order
        """
        params = {
            "limit": PRODUCTS_PAGE_LIMIT,
            "status": "active",
            "published_status": "published",
        }

        try:
            data = await self._get_json("/products.json", params=params)
        except ShopifyError as e:
            logger.error("Error fetching products from %s: %s", self.shop_domain, e)
            raise

        products = data.get("products") if isinstance(data, dict) else None
        if not isinstance(products, list):
            logger.error("Malformed products response from %s", self.shop_domain)
            raise ShopifyError("Malformed response: missing 'products' list")

        return products

    async def get_all_products(self) -> List[CatalogItem]:
        """
        Fetch active, published products as catalog items.

        Returns:
            CatalogItem list in upstream order

        Raises:
            ShopifyError: If the request fails or a product entry is malformed
        """
        products = await self.get_raw_products()
        try:
            items = [CatalogItem.from_api(product) for product in products]
        except ValueError as e:
            raise ShopifyError(f"Malformed product payload: {e}") from e

        logger.info("Fetched %d products from %s", len(items), self.shop_domain)
        return items

    async def count_products(self) -> int:
        """Count active, published products on the first page."""
        return len(await self.get_all_products())

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "ShopifyClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
