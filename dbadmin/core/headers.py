"""
Response headers for served column values.
"""

import re
from typing import Dict, Optional

from .time_utils import http_date

DEFAULT_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "X-Robots-Tag": "noindex, nofollow",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Content-Security-Policy": "default-src 'self'",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def sanitize_filename(filename: Optional[str]) -> str:
    """Replace every character outside [A-Za-z0-9_.-] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename or "")


def send_default_headers() -> Dict[str, str]:
    """Security headers sent with every served value."""
    return dict(DEFAULT_HEADERS)


def no_cache_headers() -> Dict[str, str]:
    now = http_date()
    return {
        "Expires": now,
        "Last-Modified": now,
        "Cache-Control": "no-store, no-cache, must-revalidate, pre-check=0, post-check=0, max-age=0",
        "Pragma": "no-cache",
    }


def download_headers(
    filename: Optional[str],
    mime_type: str,
    length: int = 0,
    no_cache: bool = True,
) -> Dict[str, str]:
    """
    Headers for sending a value as a file download.

    Args:
        filename: Suggested file name; sanitized, omitted when empty
        mime_type: Value of the Content-Type header
        length: Content-Length to announce, skipped when 0
        no_cache: Add headers that prevent caching
    """
    headers: Dict[str, str] = no_cache_headers() if no_cache else {}

    filename = sanitize_filename(filename)
    if filename:
        headers["Content-Description"] = "File Transfer"
        headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    headers["Content-Type"] = mime_type
    # Already compressed, keep the server from compressing it again
    if "gzip" in mime_type:
        headers["Content-Encoding"] = "gzip"
    headers["Content-Transfer-Encoding"] = "binary"
    if length > 0:
        headers["Content-Length"] = str(length)
    return headers
