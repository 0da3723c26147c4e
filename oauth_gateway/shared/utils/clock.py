# oauth_gateway/shared/utils/clock.py

"""
Time helpers shared by the quota and token code.

All timestamps handled by the service are timezone-aware UTC datetimes.
Some drivers (SQLite) hand back naive values; those are read as UTC.
"""

from datetime import datetime, timezone
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_epoch(value: datetime) -> int:
    """Whole seconds since the epoch."""
    return int(ensure_utc(value).timestamp())
