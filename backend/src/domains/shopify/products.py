"""Temporary product provisioning."""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from infrastructure.config.settings import Settings
from shared import (
    CreatedProduct,
    FileUploadError,
    LoggerMixin,
    ProductCreationError,
    ValidationError,
    current_millis,
    decode_base64,
    extension_for_mime,
    generate_temp_sku,
    split_data_uri,
)
from .client import ShopifyClient


@dataclass(frozen=True)
class ImageSource:
    """Customer image, either base64 contents to upload or a hosted URL."""
    base64_data: Optional[str] = None
    mime: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_base64(cls, value: str, max_bytes: int) -> "ImageSource":
        """Validate base64 input, dropping any data-URI prefix."""
        mime, payload = split_data_uri(value)
        if not payload:
            raise ValidationError("imageBase64", "imageBase64 required")

        raw = decode_base64(payload)
        if raw is None:
            raise ValidationError("imageBase64", "imageBase64 is not valid base64")
        if len(raw) > max_bytes:
            raise ValidationError(
                "imageBase64",
                f"image exceeds {max_bytes} bytes",
                details={"size": len(raw)}
            )
        return cls(base64_data=payload, mime=mime)

    @classmethod
    def from_url(cls, url: str) -> "ImageSource":
        url = url.strip()
        if not url.startswith(("https://", "http://")):
            raise ValidationError("imageUrl", "imageUrl must be an http(s) URL")
        return cls(url=url)

    @property
    def needs_upload(self) -> bool:
        return self.url is None


class ProductProvisioner(LoggerMixin):
    """Creates hidden single-variant products that carry a customer image."""

    def __init__(self, client: ShopifyClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def resolve_image(self, image: ImageSource) -> str:
        """Return a durable image URL, uploading the contents if needed."""
        if not image.needs_upload:
            return image.url

        filename = f"custom-{current_millis()}.{extension_for_mime(image.mime)}"
        data = await self.client.upload_file(image.base64_data, filename)

        file_data = data.get("file") if isinstance(data, dict) else None
        url = file_data.get("url") if isinstance(file_data, dict) else None
        if not url:
            raise FileUploadError(data)
        return url

    def build_product_payload(
        self,
        title: str,
        file_url: str,
        price: str,
        sku: str
    ) -> Dict[str, Any]:
        return {
            "title": title,
            "vendor": self.settings.product_vendor,
            "product_type": self.settings.product_type,
            "published": False,
            "images": [{"src": file_url}],
            "variants": [
                {
                    "option1": "Default",
                    "price": price,
                    "sku": sku
                }
            ]
        }

    async def create_hidden_product(
        self,
        title: Optional[str],
        image: ImageSource,
        price: Optional[str] = None
    ) -> CreatedProduct:
        """Upload the image and create the hidden product around it."""
        title = title or self.settings.default_product_title
        price = price or self.settings.default_product_price

        file_url = await self.resolve_image(image)

        sku = generate_temp_sku(self.settings.temp_sku_prefix)
        payload = self.build_product_payload(title, file_url, price, sku)
        data = await self.client.create_product(payload)

        product = data.get("product") if isinstance(data, dict) else None
        if not isinstance(product, dict) or "id" not in product:
            raise ProductCreationError(data)

        variants = product.get("variants") or []
        if not isinstance(variants, list):
            raise ProductCreationError(data)
        variant = variants[0] if variants else {}
        if not isinstance(variant, dict):
            raise ProductCreationError(data)

        try:
            created = CreatedProduct(
                product_id=product["id"],
                variant_id=variant.get("id"),
                sku=variant.get("sku") or sku,
                file_url=file_url
            )
        except ValueError as e:
            raise ProductCreationError(data) from e

        self.log_event(
            "temporary_product_created",
            product_id=created.product_id,
            variant_id=created.variant_id,
            sku=created.sku
        )
        return created
