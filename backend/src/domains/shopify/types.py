"""Shopify-specific type definitions."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShopifyModel(BaseModel):
    """Base for upstream payloads; unknown fields are kept, not rejected."""
    model_config = ConfigDict(extra="allow")


class ShopifyImage(ShopifyModel):
    """Shopify product image."""
    id: Optional[int] = None
    src: Optional[str] = None


class ShopifyVariant(ShopifyModel):
    """Shopify product variant."""
    id: Optional[int] = None
    product_id: Optional[int] = None
    title: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[str] = None
    option1: Optional[str] = None

    def has_sku_prefix(self, prefix: str) -> bool:
        return bool(self.sku) and self.sku.startswith(prefix)


class ShopifyProduct(ShopifyModel):
    """Shopify product as returned by the Admin REST API."""
    id: int
    title: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    status: Optional[str] = None
    published_at: Optional[str] = None
    variants: List[ShopifyVariant] = Field(default_factory=list)
    images: List[ShopifyImage] = Field(default_factory=list)

    def is_temporary(self, prefix: str) -> bool:
        """True when any variant carries the reserved SKU prefix."""
        return any(v.has_sku_prefix(prefix) for v in self.variants)


class OrderLineItem(ShopifyModel):
    """Line item from an orders/create webhook."""
    id: Optional[int] = None
    sku: Optional[str] = None
    variant_id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: Optional[int] = None
    title: Optional[str] = None

    def is_temporary(self, prefix: str) -> bool:
        return bool(self.sku) and self.sku.startswith(prefix)


class OrderWebhook(ShopifyModel):
    """orders/create webhook payload (only the fields cleanup needs)."""
    id: Optional[int] = None
    name: Optional[str] = None
    line_items: List[OrderLineItem] = Field(default_factory=list)

    @field_validator("line_items", mode="before")
    @classmethod
    def _null_line_items(cls, value):
        return value or []
