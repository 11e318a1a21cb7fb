"""Shared fixtures: settings, an in-memory Shopify store and an app client."""

import base64
import itertools
import json
import os
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SHOPIFY_STORE", "test-store.myshopify.com")
os.environ.setdefault("SHOPIFY_ADMIN_API_TOKEN", "shpat_test_token")

from infrastructure.api.app import create_app
from infrastructure.config.settings import Settings
from domains.shopify.client import ShopifyClient


API_VERSION = "2024-07"
BASE_PATH = f"/admin/api/{API_VERSION}/"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("ascii")


def make_settings(**overrides: Any) -> Settings:
    values = {
        "SHOPIFY_STORE": "test-store.myshopify.com",
        "SHOPIFY_ADMIN_API_TOKEN": "shpat_test_token",
        "SHOPIFY_API_VERSION": API_VERSION,
        "TEMP_SKU_PREFIX": "CUST-",
        "SHOPIFY_WEBHOOK_SECRET": "",
        "ADMIN_KEY": "",
        "LOG_JSON": False,
    }
    values.update(overrides)
    return Settings(**values)


class FakeShopify:
    """Minimal stand-in for the Admin REST API."""

    def __init__(self):
        self.products: Dict[int, Dict[str, Any]] = {}
        self.variants: Dict[int, Dict[str, Any]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.bodies: List[Optional[Dict[str, Any]]] = []
        self.requests: List[httpx.Request] = []
        self.failures: Dict[Tuple[str, str], httpx.Response] = {}
        self.upload_response: Dict[str, Any] = {
            "file": {"url": "https://cdn.shopify.com/s/files/custom.jpg"}
        }
        self.create_response: Optional[Dict[str, Any]] = None
        self.graphql_response: Dict[str, Any] = {"data": {}}
        self._ids = itertools.count(1001)

    def add_product(
        self,
        sku: Optional[str],
        published: bool = False,
        product_id: Optional[int] = None
    ) -> Dict[str, Any]:
        product_id = product_id or next(self._ids)
        variant = {"id": next(self._ids), "product_id": product_id, "sku": sku, "price": "499.00"}
        product = {
            "id": product_id,
            "title": "Custom Jersey",
            "published_at": "2024-01-01T00:00:00Z" if published else None,
            "variants": [variant],
            "images": [],
        }
        self.products[product_id] = product
        self.variants[variant["id"]] = variant
        return product

    def fail(self, method: str, path: str, status_code: int = 500, text: str = "boom"):
        self.failures[(method, path)] = httpx.Response(status_code, text=text)

    def paths(self, method: str) -> List[str]:
        return [path for m, path in self.calls if m == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path[len(BASE_PATH):]
        method = request.method
        body = json.loads(request.content) if request.content else None
        self.calls.append((method, path))
        self.requests.append(request)
        self.bodies.append(body)

        if (method, path) in self.failures:
            return self.failures[(method, path)]

        if method == "POST" and path == "files.json":
            return httpx.Response(200, json=self.upload_response)

        if method == "POST" and path == "products.json":
            if self.create_response is not None:
                return httpx.Response(200, json=self.create_response)
            payload = body["product"]
            sku = payload["variants"][0]["sku"]
            product = self.add_product(sku)
            product["title"] = payload["title"]
            return httpx.Response(201, json={"product": product})

        if method == "GET" and path == "products.json":
            products = [
                p for p in self.products.values() if p["published_at"] is None
            ]
            limit = int(request.url.params.get("limit", "50"))
            return httpx.Response(200, json={"products": products[:limit]})

        if method == "GET" and path.startswith("variants/"):
            variant_id = int(path[len("variants/"):-len(".json")])
            variant = self.variants.get(variant_id)
            if not variant:
                return httpx.Response(404, json={"errors": "Not Found"})
            return httpx.Response(200, json={"variant": variant})

        if method == "DELETE" and path.startswith("products/"):
            product_id = int(path[len("products/"):-len(".json")])
            product = self.products.pop(product_id, None)
            if not product:
                return httpx.Response(404, json={"errors": "Not Found"})
            for variant in product["variants"]:
                self.variants.pop(variant.get("id"), None)
            return httpx.Response(200, json={})

        if method == "POST" and path == "graphql.json":
            return httpx.Response(200, json=self.graphql_response)

        return httpx.Response(404, json={"errors": "Not Found"})


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_shopify() -> FakeShopify:
    return FakeShopify()


@pytest.fixture
def shopify_client(fake_shopify, settings) -> ShopifyClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_shopify.handler))
    return ShopifyClient(
        store_url=settings.shopify_store,
        access_token=settings.shopify_admin_api_token,
        api_version=settings.shopify_api_version,
        http_client=http_client
    )


@pytest.fixture
def build_client(fake_shopify):
    """Factory for a TestClient bound to the fake store and given settings."""
    def _build(raise_server_exceptions: bool = True, **overrides: Any) -> TestClient:
        app_settings = make_settings(**overrides)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_shopify.handler))
        client = ShopifyClient(
            store_url=app_settings.shopify_store,
            access_token=app_settings.shopify_admin_api_token,
            api_version=app_settings.shopify_api_version,
            http_client=http_client
        )
        return TestClient(
            create_app(app_settings, shopify_client=client),
            raise_server_exceptions=raise_server_exceptions
        )
    return _build


@pytest.fixture
def api_client(build_client) -> TestClient:
    return build_client()
