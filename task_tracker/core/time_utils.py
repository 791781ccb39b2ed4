from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as naive UTC, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize aware or naive datetimes to naive UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is not None and dt.utcoffset() is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def isoformat_utc(dt: datetime) -> str:
    """ISO 8601 in milliseconds with a ``Z`` suffix, e.g. ``2030-01-15T09:30:00.000Z``."""
    return to_naive_utc(dt).isoformat(timespec="milliseconds") + "Z"
