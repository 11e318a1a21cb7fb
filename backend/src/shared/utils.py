"""Utility functions for the custom product relay."""

import base64
import binascii
import re
import time
import uuid
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, TypeVar


T = TypeVar("T", bound=Hashable)

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w-]+=[\w.-]+)*;base64,", re.IGNORECASE)

_MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def generate_id(prefix: str = "") -> str:
    """Generate a unique ID with optional prefix."""
    unique_id = str(uuid.uuid4())
    return f"{prefix}_{unique_id}" if prefix else unique_id


def generate_request_id() -> str:
    """Generate a request ID for tracing."""
    return generate_id("req")


def current_millis() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def generate_temp_sku(prefix: str) -> str:
    """Build a temporary SKU: prefix, millisecond timestamp, random suffix.

    The random hex suffix keeps two requests landing in the same
    millisecond from sharing a SKU.
    """
    return f"{prefix}{current_millis()}-{uuid.uuid4().hex[:8]}"


def split_data_uri(value: str) -> Tuple[Optional[str], str]:
    """Strip a ``data:<mime>;base64,`` prefix.

    Returns the mime type (``None`` when absent) and the bare payload.
    """
    value = value.strip()
    match = _DATA_URI_RE.match(value)
    if not match:
        return None, value
    mime = match.group("mime")
    return (mime.lower() if mime else None), value[match.end():]


def extension_for_mime(mime: Optional[str], default: str = "jpg") -> str:
    """Map an image mime type to a file extension."""
    if not mime:
        return default
    return _MIME_EXTENSIONS.get(mime, default)


def decode_base64(payload: str) -> Optional[bytes]:
    """Strictly decode base64, ignoring embedded whitespace.

    Returns ``None`` when the payload is not valid base64.
    """
    cleaned = re.sub(r"\s+", "", payload)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        return None


def dedupe(items: Iterable[T]) -> List[T]:
    """Remove duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def mask_secret(value: Optional[str]) -> Optional[str]:
    """Mask all but the last four characters of a secret."""
    if not value:
        return value
    return "***" + value[-4:] if len(value) > 4 else "****"


def create_error_response(
    error: Exception,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """Create standardized failure body."""
    from shared.exceptions import RelayException

    if isinstance(error, RelayException):
        return {
            "success": False,
            "message": error.message,
            "error_code": error.error_code,
            "request_id": request_id
        }

    return {
        "success": False,
        "message": str(error) or "An unexpected error occurred",
        "error_code": "INTERNAL_ERROR",
        "request_id": request_id
    }
