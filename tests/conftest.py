"""Pytest fixtures: stub Shopify upstream and configured test client."""

import httpx
import pytest
from fastapi.testclient import TestClient

from shopify_rss.deps import get_upstream_transport
from shopify_rss.main import app


FULL_PRODUCT = {
    "id": 1,
    "title": "Linen Shirt",
    "body_html": "<p>Soft <strong>linen</strong> &amp; cotton</p>",
    "handle": "linen-shirt",
    "updated_at": "2023-10-02T13:30:00+03:00",
    "product_type": "Shirts",
    "tags": "summer, linen ,men",
    "images": [
        {"id": 11, "src": "https://cdn.shopify.com/linen-1.jpg"},
        {"id": 12, "src": "https://cdn.shopify.com/linen-2.jpg"},
    ],
    "variants": [
        {"id": 21, "price": "499.90"},
        {"id": 22, "price": "549.90"},
    ],
}

MINIMAL_PRODUCT = {
    "id": 2,
    "title": "Gift Card",
    "handle": "gift-card",
    "updated_at": "2023-10-01T09:00:00Z",
}


class StubUpstream:
    """Records requests and answers with a canned Shopify response."""

    def __init__(self, status_code=200, json_body=None, text=None):
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {"products": []}
        self.text = text
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def shop_env(monkeypatch):
    monkeypatch.setenv("SHOPIFY_SHOP_DOMAIN", "test-shop.myshopify.com")
    monkeypatch.setenv("SHOPIFY_ACCESS_TOKEN", "shpat_test_token")
    monkeypatch.setenv("RSS_TITLE", "Test Store")
    monkeypatch.setenv("RSS_DESCRIPTION", "Everything we sell")


@pytest.fixture
def no_shop_env(monkeypatch):
    monkeypatch.delenv("SHOPIFY_SHOP_DOMAIN", raising=False)
    monkeypatch.delenv("SHOPIFY_ACCESS_TOKEN", raising=False)


@pytest.fixture
def upstream():
    return StubUpstream(json_body={"products": [FULL_PRODUCT, MINIMAL_PRODUCT]})


@pytest.fixture
def client(upstream):
    """TestClient whose outbound Shopify calls hit the stub upstream."""
    app.dependency_overrides[get_upstream_transport] = upstream.transport
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
