"""Integration tests against a real Shopify store.

Creates and deletes a real temporary product. Opt in with
RUN_SHOPIFY_INTEGRATION=1 plus real SHOPIFY_STORE / SHOPIFY_ADMIN_API_TOKEN.
"""

import os
import re

import pytest

from domains.shopify.client import ShopifyClient
from domains.shopify.cleanup import TemporaryProductCleaner
from domains.shopify.products import ImageSource, ProductProvisioner
from infrastructure.config.settings import get_settings


pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.getenv("RUN_SHOPIFY_INTEGRATION") != "1",
        reason="Shopify integration tests not enabled"
    ),
]

SAMPLE_IMAGE_URL = os.getenv(
    "SHOPIFY_SAMPLE_IMAGE_URL",
    "https://cdn.shopify.com/s/files/1/0533/2089/files/placeholder-images-image_large.png"
)


@pytest.fixture
async def shopify_client():
    """Create a real Shopify client for testing."""
    settings = get_settings()

    client = ShopifyClient(
        store_url=settings.shopify_store,
        access_token=settings.shopify_admin_api_token,
        api_version=settings.shopify_api_version
    )

    yield client

    await client.close()


class TestShopifyAPIConnection:
    """Test basic Shopify API connection."""

    async def test_api_connection(self, shopify_client):
        data = await shopify_client.request("shop.json")
        assert "shop" in data

    async def test_graphql_connection(self, shopify_client):
        data = await shopify_client.graphql("query { shop { name } }")
        assert data["shop"]["name"]


class TestTemporaryProductLifecycle:
    """Create a hidden product and clean it up through an order payload."""

    async def test_create_and_cleanup(self, shopify_client):
        settings = get_settings()
        provisioner = ProductProvisioner(shopify_client, settings)
        cleaner = TemporaryProductCleaner(shopify_client, settings)

        created = await provisioner.create_hidden_product(
            "Integration Test Jersey",
            ImageSource.from_url(SAMPLE_IMAGE_URL),
            "1.00"
        )
        print(f"\nCreated temporary product {created.product_id} sku={created.sku}")

        assert re.match(rf"^{re.escape(settings.temp_sku_prefix)}\d+", created.sku)
        assert created.variant_id

        order = cleaner.parse_order(
            f'{{"line_items": [{{"sku": "{created.sku}", "variant_id": {created.variant_id}}}]}}'
        )
        report = await cleaner.process_order(order)

        assert report.deleted == [created.product_id]
