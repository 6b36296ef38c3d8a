"""
Tests for download and default response headers.
"""

from datetime import datetime

from dbadmin.core.headers import download_headers, sanitize_filename, send_default_headers
from dbadmin.core.time_utils import http_date


def test_sanitize_filename():
    """Unsafe filename characters become underscores"""
    assert sanitize_filename("report-2024_v1.pdf") == "report-2024_v1.pdf"
    assert sanitize_filename('a b/"c".txt') == "a_b__c_.txt"
    assert sanitize_filename(None) == ""


def test_download_headers_with_filename():
    """A filename adds disposition and description headers"""
    headers = download_headers("my file.png", "image/png", length=10)
    assert headers["Content-Disposition"] == 'attachment; filename="my_file.png"'
    assert headers["Content-Description"] == "File Transfer"
    assert headers["Content-Type"] == "image/png"
    assert headers["Content-Transfer-Encoding"] == "binary"
    assert headers["Content-Length"] == "10"
    assert headers["Pragma"] == "no-cache"
    assert "no-store" in headers["Cache-Control"]


def test_download_headers_without_filename():
    """No filename means no Content-Disposition"""
    headers = download_headers("", "application/octet-stream", no_cache=False)
    assert "Content-Disposition" not in headers
    assert "Content-Length" not in headers
    assert "Pragma" not in headers
    assert headers["Content-Type"] == "application/octet-stream"


def test_gzip_content_is_marked_encoded():
    """Gzip content is flagged so it is not compressed twice"""
    assert download_headers("dump.sql.gz", "application/gzip")["Content-Encoding"] == "gzip"
    assert "Content-Encoding" not in download_headers("dump.sql", "text/plain")


def test_default_headers():
    """Security headers are always present"""
    headers = send_default_headers()
    assert headers["X-Content-Type-Options"] == "nosniff"
    assert headers["X-Frame-Options"] == "DENY"


def test_http_date_format():
    """HTTP dates use the RFC 7231 GMT format"""
    assert http_date(datetime(2024, 1, 2, 3, 4, 5)) == "Tue, 02 Jan 2024 03:04:05 GMT"
