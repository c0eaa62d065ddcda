"""A timespan is defined by a start and end time and used for comparisons.

Occurrences may be floating, pinned to a timezone, in UTC, or cover entire
days. None of those can be compared against each other (or against a query
window) until they are placed on a single time scale. A `Timespan` is that
placement: both ends are always timezone aware.
"""

from __future__ import annotations

import datetime
from typing import Any

from .util import normalize_datetime

__all__ = ["Timespan"]


class Timespan:
    """An unambiguous half-open interval [start, end).

    A timespan is never "floating" and instead is always aligned to some kind
    of timezone or utc.
    """

    def __init__(self, start: datetime.datetime, end: datetime.datetime) -> None:
        """Initialize Timespan."""
        if not start.tzinfo:
            raise ValueError(f"Start time did not have a timezone: {start}")
        if not end.tzinfo:
            raise ValueError(f"End time did not have a timezone: {end}")
        if end < start:
            raise ValueError(f"Timespan end {end} is before start {start}")
        self._start = start
        self._end = end

    @classmethod
    def of(  # pylint: disable=invalid-name
        cls,
        start: datetime.date | datetime.datetime,
        end: datetime.date | datetime.datetime,
        tzinfo: datetime.tzinfo | None = None,
    ) -> Timespan:
        """Create a Timespan for the specified date range.

        Floating and date values are interpreted in `tzinfo`, or the local
        timezone when not specified.
        """
        return Timespan(
            normalize_datetime(start, tzinfo), normalize_datetime(end, tzinfo)
        )

    @property
    def start(self) -> datetime.datetime:
        """Return the timespan start as a datetime."""
        return self._start

    @property
    def end(self) -> datetime.datetime:
        """Return the timespan end as a datetime."""
        return self._end

    @property
    def duration(self) -> datetime.timedelta:
        """Return the timespan duration."""
        return self.end - self.start

    def intersects(self, other: Timespan) -> bool:
        """Return True if this timespan overlaps with the other timespan.

        An empty timespan intersects when it starts inside the other one.
        """
        if self.start == self.end:
            return other.start <= self.start < other.end
        if other.start == other.end:
            return self.start <= other.start < self.end
        return self.start < other.end and other.start < self.end

    def includes(self, instant: datetime.datetime) -> bool:
        """Return True if the instant falls within this timespan."""
        return self.start <= instant < self.end

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Timespan):
            return NotImplemented
        return (self._start, self._end) == (other.start, other.end)

    def __hash__(self) -> int:
        return hash((self._start, self._end))

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Timespan):
            return NotImplemented
        return (self._start, self._end) < (other.start, other.end)

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Timespan):
            return NotImplemented
        return (self._start, self._end) > (other.start, other.end)

    def __repr__(self) -> str:
        return f"Timespan({self._start.isoformat()}, {self._end.isoformat()})"
