"""Shopify domain API routes."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.config.settings import Settings
from shared import (
    AuthError,
    ProcessingError,
    RequestLogger,
    ValidationError,
    generate_request_id,
    get_logger,
)
from .cleanup import TemporaryProductCleaner
from .client import ShopifyClient
from .products import ImageSource, ProductProvisioner
from .webhooks import verify_admin_key, verify_webhook_hmac


router = APIRouter()
logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_shopify_client(request: Request) -> ShopifyClient:
    return request.app.state.shopify_client


class CreateCustomProductRequest(BaseModel):
    """Create request sent by the storefront."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    price: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def _price_to_string(cls, value):
        if isinstance(value, bool):
            raise ValueError("price must be a string or number")
        if isinstance(value, (int, float)):
            return f"{value:.2f}"
        return value


@router.post("/api/create-custom-product")
async def create_custom_product(
    payload: CreateCustomProductRequest,
    settings: Settings = Depends(get_app_settings),
    client: ShopifyClient = Depends(get_shopify_client)
) -> Dict[str, Any]:
    """Create a hidden product wrapping the customer's image."""
    if payload.image_base64:
        image = ImageSource.from_base64(payload.image_base64, settings.max_image_bytes)
    elif payload.image_url:
        image = ImageSource.from_url(payload.image_url)
    else:
        raise ValidationError("imageBase64", "imageBase64 required")

    provisioner = ProductProvisioner(client, settings)
    created = await provisioner.create_hidden_product(
        title=payload.title,
        image=image,
        price=payload.price
    )

    return {
        "success": True,
        "productId": created.product_id,
        "variantId": created.variant_id,
        "sku": created.sku,
        "fileUrl": created.file_url
    }


@router.post("/webhooks/orders/create", response_class=PlainTextResponse)
async def orders_create_webhook(
    request: Request,
    x_shopify_hmac_sha256: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
    client: ShopifyClient = Depends(get_shopify_client)
) -> PlainTextResponse:
    """Delete temporary products once their order has been placed."""
    body = await request.body()

    if not verify_webhook_hmac(body, x_shopify_hmac_sha256, settings.shopify_webhook_secret):
        logger.warning("webhook_hmac_mismatch")
        return PlainTextResponse("HMAC mismatch", status_code=401)

    cleaner = TemporaryProductCleaner(client, settings)
    try:
        with RequestLogger(logger, generate_request_id(), "orders_create_webhook"):
            order = cleaner.parse_order(body)
            await cleaner.process_order(order)
    except ProcessingError:
        return PlainTextResponse("Error", status_code=500)

    return PlainTextResponse("OK", status_code=200)


@router.post("/admin/cleanup-temp-products")
async def cleanup_temp_products(
    x_admin_key: Optional[str] = Header(default=None, alias="x-admin-key"),
    settings: Settings = Depends(get_app_settings),
    client: ShopifyClient = Depends(get_shopify_client)
) -> Dict[str, Any]:
    """Delete every leftover temporary product."""
    if not verify_admin_key(x_admin_key, settings.admin_key):
        raise AuthError("Unauthorized")

    cleaner = TemporaryProductCleaner(client, settings)
    with RequestLogger(logger, generate_request_id(), "cleanup_temp_products"):
        report = await cleaner.sweep()

    return {
        "success": True,
        "deletedCount": report.deleted_count,
        "deleted": report.deleted
    }
