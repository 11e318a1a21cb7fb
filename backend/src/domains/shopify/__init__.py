"""Shopify domain."""

from .client import ShopifyClient
from .products import ImageSource, ProductProvisioner
from .cleanup import TemporaryProductCleaner
from .webhooks import compute_webhook_hmac, verify_webhook_hmac, verify_admin_key
from .types import ShopifyProduct, ShopifyVariant, OrderWebhook, OrderLineItem

__all__ = [
    "ShopifyClient",
    "ImageSource",
    "ProductProvisioner",
    "TemporaryProductCleaner",
    "compute_webhook_hmac",
    "verify_webhook_hmac",
    "verify_admin_key",
    "ShopifyProduct",
    "ShopifyVariant",
    "OrderWebhook",
    "OrderLineItem",
]
