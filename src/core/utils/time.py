"""
Time-related utilities for the application.

All timestamps are generated in UTC. Record timestamps are serialized
using ISO-8601 with timezone information so they sort lexicographically;
HTTP dates follow RFC 7231.
"""

import time
from datetime import datetime, timezone
from email.utils import format_datetime


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def to_http_date(value: datetime | str) -> str:
    """Format a datetime (or ISO-8601 string) as an RFC 7231 HTTP date.

    Naive values are treated as UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def http_date_in(seconds: int) -> str:
    """HTTP date `seconds` from now."""
    return to_http_date(datetime.fromtimestamp(time.time() + seconds, tz=timezone.utc))
