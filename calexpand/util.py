"""Utility methods used by multiple components."""

from __future__ import annotations

from collections.abc import Sequence
import datetime
import logging
import re
from typing import Any, overload
import zoneinfo

__all__ = [
    "local_timezone",
    "normalize_datetime",
    "parse_date_and_datetime",
    "parse_date_and_datetime_or_str",
    "parse_date_and_datetime_or_str_list",
]

_LOGGER = logging.getLogger(__name__)


MIDNIGHT = datetime.time()

# A date-time followed by a bracketed IANA zone name, e.g.
# 2024-01-01T09:00:00[America/New_York]
_ZONED_DATETIME_RE = re.compile(r"(?P<value>[^\[\]]+)\[(?P<zone>[^\[\]]+)\]")


def local_timezone() -> datetime.tzinfo:
    """Get the local timezone to use when converting date to datetime."""
    if local_tz := datetime.datetime.now().astimezone().tzinfo:
        return local_tz
    return datetime.timezone.utc


def normalize_datetime(
    value: datetime.date | datetime.datetime, tzinfo: datetime.tzinfo | None = None
) -> datetime.datetime:
    """Convert date or datetime to a value that can be used for comparison."""
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, MIDNIGHT)
    if value.tzinfo is None:
        if tzinfo is None:
            tzinfo = local_timezone()
        value = value.replace(tzinfo=tzinfo)
    return value


def _parse_str(value: str) -> datetime.date | datetime.datetime:
    if match := _ZONED_DATETIME_RE.fullmatch(value):
        try:
            tzinfo = zoneinfo.ZoneInfo(match.group("zone"))
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as err:
            raise ValueError(f"Unknown timezone in value: {value}") from err
        parsed = datetime.datetime.fromisoformat(match.group("value"))
        if parsed.tzinfo is not None:
            raise ValueError(f"Expected local time with a timezone name: {value}")
        return parsed.replace(tzinfo=tzinfo)
    if "T" in value or " " in value:
        return datetime.datetime.fromisoformat(value)
    return datetime.date.fromisoformat(value)


@overload
def parse_date_and_datetime(value: None) -> None: ...


@overload
def parse_date_and_datetime(value: str | datetime.date) -> datetime.date: ...


def parse_date_and_datetime(value: Any) -> Any:
    """Coerce str into date and datetime value."""
    if not isinstance(value, str):
        return value
    return _parse_str(value)


def parse_date_and_datetime_or_str(value: Any) -> Any:
    """Coerce str into date and datetime value, keeping unreadable values.

    A value that can't be read as a date is returned as is so that it is
    reported when it is used rather than when it is ingested.
    """
    try:
        return parse_date_and_datetime(value)
    except ValueError as err:
        _LOGGER.debug("Keeping unreadable date value %r: %s", value, err)
        return value


def parse_date_and_datetime_or_str_list(values: Any) -> Any:
    """Coerce list[str] into date and datetime values, keeping unreadable values."""
    if not values:
        return []
    if not isinstance(values, Sequence) or isinstance(values, str):
        return values
    return [parse_date_and_datetime_or_str(val) for val in values]
