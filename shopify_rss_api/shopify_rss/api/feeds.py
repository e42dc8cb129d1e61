"""
RSS feed and product count API endpoints.
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from shopify_rss.config import Settings, get_settings
from shopify_rss.deps import get_shopify_client, build_feed_config
from shopify_rss.core.shopify_client import ShopifyClient
from shopify_rss.core.feed import generate_rss
from shopify_rss.schemas.common import ErrorResponse, ProductCountResponse

router = APIRouter(tags=["Feeds"])

logger = logging.getLogger(__name__)

RSS_MEDIA_TYPE = "application/rss+xml; charset=utf-8"


def _error_response(error: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=error, message=str(exc)).model_dump()
    )


async def _render_feed(client: ShopifyClient, settings: Settings) -> Response:
    """Fetch the catalog and render it as an RSS response."""
    items = await client.get_all_products()
    logger.info("%d products found", len(items))

    xml = generate_rss(items, build_feed_config(settings))
    return Response(content=xml, media_type=RSS_MEDIA_TYPE)


@router.api_route("/rss", methods=["GET", "HEAD"], response_class=Response)
async def rss_feed(
    client: ShopifyClient = Depends(get_shopify_client),
    settings: Settings = Depends(get_settings)
):
    """Full catalog RSS feed."""
    logger.info("RSS feed requested")
    try:
        return await _render_feed(client, settings)
    except Exception as e:
        logger.exception("Error generating RSS feed")
        return _error_response("Could not generate RSS feed", e)


@router.api_route("/rss/pinterest", methods=["GET", "HEAD"], response_class=Response)
async def pinterest_rss_feed(
    client: ShopifyClient = Depends(get_shopify_client),
    settings: Settings = Depends(get_settings)
):
    """RSS feed for Pinterest; same document shape as /rss."""
    logger.info("Pinterest RSS feed requested")
    try:
        return await _render_feed(client, settings)
    except Exception as e:
        logger.exception("Error generating Pinterest RSS feed")
        return _error_response("Could not generate Pinterest RSS feed", e)


@router.api_route(
    "/api/products/count",
    methods=["GET", "HEAD"],
    response_model=ProductCountResponse,
    responses={500: {"model": ErrorResponse}}
)
async def product_count(client: ShopifyClient = Depends(get_shopify_client)):
    """Number of active, published products."""
    try:
        count = await client.count_products()
    except Exception as e:
        logger.exception("Error fetching product count")
        return _error_response("Could not fetch product count", e)

    return ProductCountResponse(count=count, message=f"{count} active products found")
