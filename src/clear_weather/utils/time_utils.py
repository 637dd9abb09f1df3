"""Time-related utility functions for the ClearWeather forecast viewer.

All instants are handled as epoch seconds. A timezone of ``None`` means the
system local timezone, with the host's own DST rules.
"""

import logging
from datetime import datetime, timedelta, tzinfo
from typing import NamedTuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


class DayBounds(NamedTuple):
    """Local calendar day as a half-open interval of epoch seconds."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        """Length of the day in seconds (not always 86400 on DST days)."""
        return self.end - self.start

    def contains(self, timestamp: float) -> bool:
        """Check whether ``start <= timestamp < end``."""
        return self.start <= timestamp < self.end


def resolve_timezone(timezone_id: str | None) -> ZoneInfo | None:
    """Resolve an IANA timezone identifier.

    Args:
        timezone_id: Identifier such as "Europe/Paris".

    Returns:
        The zone, or None (system local timezone) when it cannot be resolved.
    """
    if not timezone_id:
        return None
    try:
        return ZoneInfo(timezone_id)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {timezone_id!r}, using system local timezone")
        return None


def to_timestamp(moment: datetime | float) -> float:
    """Convert a datetime or epoch seconds to epoch seconds.

    Naive datetimes are interpreted in the system local timezone.
    """
    if isinstance(moment, datetime):
        return moment.timestamp()
    return float(moment)


def local_datetime(timestamp: float, tz: tzinfo | None) -> datetime:
    """Wall-clock datetime of an instant in ``tz`` (naive when tz is None)."""
    return datetime.fromtimestamp(timestamp, tz=tz)


def local_day_bounds(timezone_id: str | None, now: datetime | float) -> DayBounds:
    """Compute local midnight of ``now`` and the following local midnight.

    Both midnights follow the calendar rules of the resolved timezone, so a
    day containing a DST transition is 23 or 25 hours long.

    Args:
        timezone_id: IANA identifier; unresolvable identifiers fall back to
            the system local timezone.
        now: The instant whose local day is wanted.

    Returns:
        DayBounds for the local day containing ``now``.
    """
    tz = resolve_timezone(timezone_id)
    local_now = local_datetime(to_timestamp(now), tz)

    start_of_day = datetime(local_now.year, local_now.month, local_now.day, tzinfo=tz)
    next_date = local_now.date() + timedelta(days=1)
    end_of_day = datetime(next_date.year, next_date.month, next_date.day, tzinfo=tz)

    return DayBounds(start_of_day.timestamp(), end_of_day.timestamp())


def same_local_hour(first: float, second: float, tz: tzinfo | None) -> bool:
    """Check whether two instants fall in the same local calendar hour."""
    a = local_datetime(first, tz)
    b = local_datetime(second, tz)
    return (a.date(), a.hour) == (b.date(), b.hour)


def same_local_date(first: float, second: float, tz: tzinfo | None) -> bool:
    """Check whether two instants fall on the same local calendar date."""
    return local_datetime(first, tz).date() == local_datetime(second, tz).date()
