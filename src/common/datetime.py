"""Datetime utilities."""

from datetime import datetime, timezone
from email.utils import format_datetime

# Wire format, e.g. "Mon, 01 Jan 2024 12:00:00 +0200"
PUB_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S %z"


def parse_pub_date(value: str | None) -> datetime:
    """Parse a wire pubDate, falling back to the current UTC time.

    The fallback is truncated to whole seconds, the precision pubDate renders at.
    """
    if not value:
        return _now_utc()
    try:
        return datetime.strptime(value.strip(), PUB_DATE_FORMAT)
    except ValueError:
        return _now_utc()


def _now_utc() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_rfc1123(value: datetime) -> str:
    """Format a datetime as RFC-1123 in GMT (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)
