"""General utility functions."""
from datetime import datetime, timezone
from typing import Any, Optional


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def iso_timestamp(dt: Optional[datetime] = None) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision.

    Uses the ``Z`` suffix, e.g. ``2025-01-31T18:04:05.123Z``. Defaults to now.
    """
    if dt is None:
        dt = datetime.now(timezone.utc)
    return to_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def cell_text(value: Any) -> str:
    """Render a raw cell value as a string; missing cells become ''."""
    if value is None:
        return ""
    return str(value)
