from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional


def utc_now() -> datetime:
    """Return a naive UTC timestamp without using deprecated utcnow()."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def http_date(moment: Optional[datetime] = None) -> str:
    """Format a naive UTC timestamp (default: now) as an HTTP date header value."""
    moment = moment or utc_now()
    return format_datetime(moment.replace(tzinfo=timezone.utc), usegmt=True)
