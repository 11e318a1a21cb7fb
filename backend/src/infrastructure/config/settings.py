"""Application configuration settings."""

from functools import lru_cache
from typing import List

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.exceptions import ConfigurationError
from shared.utils import mask_secret


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at startup and frozen; components receive it explicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        frozen=True
    )

    # Application
    app_name: str = "Custom Product Relay"
    app_version: str = "1.0.0"
    app_env: str = Field(default="development", alias="APP_ENV")
    port: int = Field(default=5000, alias="PORT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    # CORS
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Shopify
    shopify_store: str = Field(alias="SHOPIFY_STORE")  # e.g. "example.myshopify.com"
    shopify_admin_api_token: str = Field(alias="SHOPIFY_ADMIN_API_TOKEN")
    shopify_api_version: str = Field(default="2024-07", alias="SHOPIFY_API_VERSION")
    shopify_timeout: float = Field(default=30.0, alias="SHOPIFY_TIMEOUT")  # seconds

    # Temporary products
    temp_sku_prefix: str = Field(default="CUST-", alias="TEMP_SKU_PREFIX")
    default_product_title: str = Field(default="Custom Jersey", alias="DEFAULT_PRODUCT_TITLE")
    default_product_price: str = Field(default="499.00", alias="DEFAULT_PRODUCT_PRICE")
    product_vendor: str = Field(default="Next Print", alias="PRODUCT_VENDOR")
    product_type: str = Field(default="Custom Jersey", alias="PRODUCT_TYPE")
    max_image_bytes: int = Field(default=15 * 1024 * 1024, alias="MAX_IMAGE_BYTES")
    cleanup_page_size: int = Field(default=250, ge=1, le=250, alias="CLEANUP_PAGE_SIZE")

    # Shared secrets; empty disables the corresponding check
    shopify_webhook_secret: str = Field(default="", alias="SHOPIFY_WEBHOOK_SECRET")
    admin_key: str = Field(default="", alias="ADMIN_KEY")

    @field_validator("shopify_store", mode="before")
    @classmethod
    def _bare_domain(cls, value):
        if isinstance(value, str):
            value = value.strip()
            for scheme in ("https://", "http://"):
                if value.startswith(scheme):
                    value = value[len(scheme):]
            value = value.rstrip("/")
        return value

    @field_validator("shopify_store", "shopify_admin_api_token", "temp_sku_prefix")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.app_env.lower() == "development"

    @property
    def shopify_base_url(self) -> str:
        """Get Shopify Admin API base URL."""
        return f"https://{self.shopify_store}/admin/api/{self.shopify_api_version}"

    @property
    def webhook_verification_enabled(self) -> bool:
        return bool(self.shopify_webhook_secret)

    @property
    def admin_key_required(self) -> bool:
        return bool(self.admin_key)

    def mask_sensitive(self) -> dict:
        """Get settings with masked sensitive values."""
        data = self.model_dump()
        for key in ("shopify_admin_api_token", "shopify_webhook_secret", "admin_key"):
            data[key] = mask_secret(data.get(key))
        return data


def load_settings(**overrides) -> Settings:
    """Build settings, turning pydantic failures into ConfigurationError."""
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or "settings"
        raise ConfigurationError(
            config_key=key,
            message=first.get("msg", "invalid value"),
            details={"errors": e.error_count()}
        ) from e


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
