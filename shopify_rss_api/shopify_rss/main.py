"""
FastAPI application entry point.
"""

import logging
import os
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopify_rss.api.feeds import router as feeds_router
from shopify_rss.config import ConfigurationMissing, get_settings
from shopify_rss.core.security import apply_security_headers, describe_secret
from shopify_rss.schemas.common import ErrorResponse, HealthResponse


SERVICE_NAME = "Simple Shopify RSS Generator"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def resolve_log_level(name: Optional[str]) -> int:
    """Map a level name to a logging level; unknown names fall back to INFO."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(name: Optional[str] = None) -> int:
    """Configure root logging from LOG_LEVEL without building Settings."""
    level = resolve_log_level(name if name is not None else os.environ.get("LOG_LEVEL"))
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    logger.info("%s started", SERVICE_NAME)
    logger.info("Routes: / , /rss , /rss/pinterest , /api/products/count , /health")
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error("Invalid configuration; data routes will fail until it is fixed: %s", e)
        settings = None

    if settings is not None:
        logger.info("SHOPIFY_SHOP_DOMAIN=%s", settings.shopify_shop_domain or "NOT SET")
        logger.info("SHOPIFY_ACCESS_TOKEN is %s", describe_secret(settings.shopify_access_token))
        if not settings.shopify_shop_domain or not settings.shopify_access_token:
            logger.warning("Shopify credentials missing; create a .env file with your shop settings")
    yield


app = FastAPI(
    title="Shopify RSS API",
    description="Serves a Shopify store's active products as an RSS 2.0 feed",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    apply_security_headers(response.headers)
    return response


app.include_router(feeds_router)


@app.exception_handler(ConfigurationMissing)
async def configuration_missing_handler(request: Request, exc: ConfigurationMissing):
    """Data routes short-circuit here before any upstream call."""
    logger.error("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Shopify configuration missing",
            message="Set the SHOPIFY_SHOP_DOMAIN and SHOPIFY_ACCESS_TOKEN environment variables"
        ).model_dump()
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # An unsupported method on a known path is treated as an unmatched route
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ErrorResponse(
                error="Page not found",
                message="The page you are looking for does not exist."
            ).model_dump()
        )
    content = ErrorResponse(error="Request error", message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Server error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Server error", message=str(exc)).model_dump()
    )


LANDING_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
</head>
<body>
  <h1>{title}</h1>
  <p>{message}</p>
  <ul>
    <li><a href="/rss">/rss</a> - product feed</li>
    <li><a href="/rss/pinterest">/rss/pinterest</a> - Pinterest feed</li>
    <li><a href="/api/products/count">/api/products/count</a> - active product count</li>
    <li><a href="/health">/health</a> - health check</li>
  </ul>
</body>
</html>
"""


@app.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse, tags=["root"])
async def root():
    """Landing page."""
    return LANDING_PAGE.format(
        title="Shopify RSS Generator",
        message="Use the /rss endpoint to get your RSS feed"
    )


@app.api_route("/health", methods=["GET", "HEAD"], response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=SERVICE_NAME
    )


def run():
    """Run the API with uvicorn on the configured port."""
    settings = get_settings()
    level = logging.getLevelName(resolve_log_level(settings.log_level)).lower()
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=level)


if __name__ == "__main__":
    run()
