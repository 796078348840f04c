"""Instant coercion and localization helpers.

All instants handled by Elapsed are timezone-aware datetimes. These helpers
turn the other accepted inputs (naive UTC datetimes, calendar dates and Unix
timestamps) into aware datetimes, and provide the default clock.
"""

from datetime import date, datetime, time, timezone, tzinfo
from typing import Callable, TypeAlias
from zoneinfo import ZoneInfo

from dateutil import tz as dateutil_tz

Clock: TypeAlias = Callable[[], datetime]
Zone: TypeAlias = str | tzinfo | None


def resolve_zone(zone: Zone) -> tzinfo:
    """Return a tzinfo for a zone name, tzinfo object, or None (local)."""
    if zone is None:
        return dateutil_tz.tzlocal()
    if isinstance(zone, str):
        return ZoneInfo(zone)
    if isinstance(zone, tzinfo):
        return zone
    raise TypeError(
        f"Time zone must be a zone name, tzinfo, or None.\n"
        f"Got {type(zone).__name__!r}: {zone!r}\n"
        f"Examples:\n"
        f"  tz='Europe/Berlin'\n"
        f"  tz=timezone.utc"
    )


def local_now() -> datetime:
    """Current instant in the local time zone."""
    return datetime.now(tz=dateutil_tz.tzlocal())


def require_aware(instant: datetime, name: str) -> datetime:
    """Return ``instant`` unchanged if it is a timezone-aware datetime.

    Raises:
        TypeError: If it is not a datetime or has no time zone.
    """
    if not isinstance(instant, datetime):
        raise TypeError(
            f"Elapsed {name} must be a timezone-aware datetime.\n"
            f"Got {type(instant).__name__!r}: {instant!r}\n"
            f"Hint: Use Elapsed.from_date() for dates and "
            f"Elapsed.from_timestamp() for Unix seconds"
        )
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise TypeError(
            f"Elapsed {name} must be a timezone-aware datetime.\n"
            f"Got naive datetime: {instant!r}\n"
            f"Hint: Add timezone info:\n"
            f"  from zoneinfo import ZoneInfo\n"
            f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
            f"# or 'US/Pacific', etc.\n"
            f"  # Or localize a UTC value: Elapsed.from_utc(dt)"
        )
    return instant


def localize(instant: datetime, zone: Zone = None) -> datetime:
    """Convert a UTC instant to the given zone (local by default).

    Naive datetimes are interpreted as UTC; aware ones are converted as is.
    """
    if not isinstance(instant, datetime):
        raise TypeError(
            f"Cannot localize {type(instant).__name__!r}: {instant!r}\n"
            f"Hint: localize() expects a datetime"
        )
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(resolve_zone(zone))


def midnight(day: date, zone: Zone = None) -> datetime:
    """Return the start of ``day`` in the given zone (local by default)."""
    # datetime is a date subclass; reject it so times are not silently dropped
    if isinstance(day, datetime) or not isinstance(day, date):
        raise TypeError(
            f"Expected a calendar date, got {type(day).__name__!r}: {day!r}\n"
            f"Hint: Pass datetimes to Elapsed() or Elapsed.from_utc()"
        )
    return datetime.combine(day, time.min, tzinfo=resolve_zone(zone))


def from_timestamp(timestamp: int, zone: Zone = None) -> datetime:
    """Convert Unix seconds to an aware datetime in the given zone."""
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise TypeError(
            f"Timestamp must be int (Unix seconds).\n"
            f"Got {type(timestamp).__name__!r}: {timestamp!r}"
        )
    return datetime.fromtimestamp(timestamp, tz=resolve_zone(zone))
