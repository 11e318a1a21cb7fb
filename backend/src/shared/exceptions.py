"""Custom exceptions for the custom product relay."""

from typing import Optional, Dict, Any


class RelayException(Exception):
    """Base exception for all relay errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class UpstreamAPIError(RelayException):
    """Raised when the Shopify API answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(
            message=f"Shopify API error: {message}",
            error_code="UPSTREAM_API_ERROR",
            details={"status_code": status_code, "body": body}
        )
        self.status_code = status_code
        self.body = body


class UpstreamParseError(RelayException):
    """Raised when a Shopify response body is not valid JSON."""

    def __init__(self, body: str):
        super().__init__(
            message=f"Shopify JSON parse error: {body}",
            error_code="UPSTREAM_PARSE_ERROR",
            details={"body": body}
        )
        self.body = body


class FileUploadError(RelayException):
    """Raised when the file upload returns no usable reference."""

    def __init__(self, response: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Shopify file upload failed: {response}",
            error_code="FILE_UPLOAD_ERROR",
            details={"response": response}
        )
        self.response = response


class ProductCreationError(RelayException):
    """Raised when product creation returns no product object."""

    def __init__(self, response: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Failed to create product: {response}",
            error_code="PRODUCT_CREATION_ERROR",
            details={"response": response}
        )
        self.response = response


class ValidationError(RelayException):
    """Raised when a required input field is missing or invalid."""

    def __init__(
        self,
        field: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, **(details or {})}
        )
        self.field = field


class AuthError(RelayException):
    """Raised on a webhook signature or admin key mismatch."""

    def __init__(self, reason: str = "Unauthorized"):
        super().__init__(
            message=reason,
            error_code="AUTH_ERROR"
        )
        self.reason = reason


class ProcessingError(RelayException):
    """Raised when a webhook body cannot be processed."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"Webhook processing error: {message}",
            error_code="PROCESSING_ERROR",
            details=details
        )


class ConfigurationError(RelayException):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        config_key: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"Configuration error for '{config_key}': {message}",
            error_code="CONFIGURATION_ERROR",
            details={"config_key": config_key, **(details or {})}
        )
        self.config_key = config_key
