"""Shared module for common utilities and types."""

from .types import (
    CreatedProduct,
    DeletionFailure,
    CleanupReport,
)

from .exceptions import (
    RelayException,
    UpstreamAPIError,
    UpstreamParseError,
    FileUploadError,
    ProductCreationError,
    ValidationError,
    AuthError,
    ProcessingError,
    ConfigurationError,
)

from .logging import (
    setup_logging,
    get_logger,
    LoggerMixin,
    RequestLogger,
)

from .utils import (
    generate_id,
    generate_request_id,
    current_millis,
    generate_temp_sku,
    split_data_uri,
    extension_for_mime,
    decode_base64,
    dedupe,
    mask_secret,
    create_error_response,
)

__all__ = [
    # Types
    "CreatedProduct",
    "DeletionFailure",
    "CleanupReport",
    # Exceptions
    "RelayException",
    "UpstreamAPIError",
    "UpstreamParseError",
    "FileUploadError",
    "ProductCreationError",
    "ValidationError",
    "AuthError",
    "ProcessingError",
    "ConfigurationError",
    # Logging
    "setup_logging",
    "get_logger",
    "LoggerMixin",
    "RequestLogger",
    # Utils
    "generate_id",
    "generate_request_id",
    "current_millis",
    "generate_temp_sku",
    "split_data_uri",
    "extension_for_mime",
    "decode_base64",
    "dedupe",
    "mask_secret",
    "create_error_response",
]
