from datetime import datetime
from typing import Optional
import pytz

PLACEHOLDER = "(none)"
DISPLAY_FORMAT = "%Y-%m-%d %I:%M %p %Z"


def get_display_timezone(name: Optional[str] = None):
    """Resolve a timezone name, or None for the machine's local zone"""
    if not name:
        return None
    return pytz.timezone(name)


def format_time(iso: Optional[str], tz_name: Optional[str] = None) -> str:
    """Format an API timestamp for display, falling back to the raw value"""
    if not iso:
        return PLACEHOLDER
    try:
        dt = datetime.fromisoformat(iso.replace('Z', '+00:00'))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=pytz.utc)
        tz = get_display_timezone(tz_name)
        return dt.astimezone(tz).strftime(DISPLAY_FORMAT)
    except (ValueError, TypeError, AttributeError, pytz.UnknownTimeZoneError):
        return str(iso)


def uuid_from_uri(uri: Optional[str]) -> str:
    """Return the trailing identifier of a resource URI"""
    if not uri:
        return PLACEHOLDER
    return uri.rstrip("/").split("/")[-1]
