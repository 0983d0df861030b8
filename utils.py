"""
Shared helpers for the certificate service.
Small, framework-free functions used by the routes and the upload storage.
"""
from typing import Optional, Any
import os
import time
from werkzeug.utils import secure_filename


ALLOWED_IMAGE_MIMETYPES = frozenset({'image/png', 'image/jpeg'})


def is_blank(value: Any) -> bool:
    """Return True for None, non-strings and strings that are empty after stripping."""
    if not isinstance(value, str):
        return True
    return value.strip() == ''


def allowed_image(mimetype: Optional[str]) -> bool:
    """Return True if the declared MIME type is accepted for background images."""
    if not isinstance(mimetype, str):
        return False
    return mimetype.lower() in ALLOWED_IMAGE_MIMETYPES


def attachment_filename(name: str) -> str:
    """Download filename for a recipient: spaces become underscores, nothing else changes."""
    return f"{name.replace(' ', '_')}_certificate.pdf"


def upload_filename(field_name: str, original_filename: Optional[str], now: Optional[float] = None) -> str:
    """Build '<epoch millis>-<field><ext>' for a stored upload.

    The extension is taken from the sanitized original filename and may be empty.
    """
    if now is None:
        now = time.time()
    ext = os.path.splitext(secure_filename(original_filename or ''))[1].lower()
    return f"{int(now * 1000)}-{field_name}{ext}"
