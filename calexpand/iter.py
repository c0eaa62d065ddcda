"""Library for iterators used in calexpand.

These iterators are primarily used for implementing recurrence rules where a
series of start instants is generated for an event. They wrap `dateutil.rrule`
and work around some of its limitations when building real world calendar
applications, such as the ability to make recurring all day events, and bound
the work done so that an open ended rule is never evaluated eagerly.

Most of the things in this library should not be consumed directly by calendar
users, but are used behind the scenes to build occurrence sets and timelines.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import datetime
import logging
from typing import Any, Generic, TypeVar, Union, cast

from .exceptions import RecurrenceError
from .types.recur import Recur
from .types.temporal import TemporalValue
from .util import local_timezone, normalize_datetime

__all__ = [
    "DEFAULT_MAX_INSTANCES",
    "AllDayConverter",
    "RecurIterable",
    "SortableItemValue",
]

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_INSTANCES = 50_000
"""Upper bound on instants generated by a single recurrence rule evaluation."""

K = TypeVar("K")
T = TypeVar("T")


class SortableItemValue(Generic[K, T]):
    """Holds an item that is sorted by an arbitrary key.

    The sort key is independent of the item to avoid extra comparisons of a
    large object.
    """

    def __init__(self, key: K, value: T) -> None:
        """Initialize SortableItemValue."""
        self._key = key
        self._value = value

    @property
    def key(self) -> K:
        """Return the sort key."""
        return self._key

    @property
    def item(self) -> T:
        """Return the underlying item."""
        return self._value

    def __lt__(self, other: Any) -> bool:
        """Compare sortable items together."""
        if not isinstance(other, SortableItemValue):
            return NotImplemented
        return cast(bool, self._key < other.key)


class AllDayConverter(Iterable[Union[datetime.date, datetime.datetime]]):
    """An iterable that converts datetimes to all days events."""

    def __init__(self, dt_iter: Iterable[datetime.date | datetime.datetime]):
        """Initialize AllDayConverter."""
        self._dt_iter = dt_iter

    def __iter__(self) -> Iterator[datetime.date | datetime.datetime]:
        """Return an iterator with all day events converted."""
        for value in self._dt_iter:
            # Convert back to datetime.date for the original all day event
            yield datetime.date.fromordinal(value.toordinal())


class RecurIterable(Iterable[TemporalValue]):
    """The start instants generated by a recurrence rule.

    `dateutil.rrule` will convert all input values to datetime even if the
    input value is a date, so values are converted back to a date for all
    day events so that they can be matched against recurrence and exclusion
    dates.

    The sequence is in chronological order and ends at the rule's own bound
    (COUNT or UNTIL), at the first instant at or after `window_end`, or after
    `max_instances` instants, whichever comes first. When `window_start` is set
    the rule is fast-forwarded and earlier instants are neither yielded nor
    counted against `max_instances`. COUNT is still applied from the rule's
    anchor. Each iteration starts again from the rule's anchor.
    """

    def __init__(
        self,
        dtstart: datetime.datetime | datetime.date,
        rule: Recur,
        window_end: datetime.datetime,
        tzinfo: datetime.tzinfo | None = None,
        max_instances: int = DEFAULT_MAX_INSTANCES,
        window_start: datetime.datetime | None = None,
    ) -> None:
        """Initialize RecurIterable."""
        if not window_end.tzinfo:
            raise ValueError(f"Expected window end with a timezone: {window_end}")
        if window_start is not None and not window_start.tzinfo:
            raise ValueError(f"Expected window start with a timezone: {window_start}")
        self._dtstart = dtstart
        self._rule = rule
        self._window_start = window_start
        self._window_end = window_end
        self._tzinfo = tzinfo
        self._max_instances = max_instances

    def _values(self) -> Iterable[datetime.date | datetime.datetime]:
        try:
            dt_rule = self._rule.as_rrule(self._dtstart)
        except (ValueError, TypeError) as err:
            raise RecurrenceError(
                f"Error creating recurrence rule ({self}): {str(err)}"
            ) from err
        values: Iterable[datetime.date | datetime.datetime] = dt_rule
        if self._window_start is not None:
            values = dt_rule.xafter(self._rule_local(self._window_start), inc=True)
        if not isinstance(self._dtstart, datetime.datetime):
            values = AllDayConverter(values)
        return values

    def _rule_local(self, value: datetime.datetime) -> datetime.datetime:
        """Return the instant in the same frame as the values of the rule."""
        if isinstance(self._dtstart, datetime.datetime) and self._dtstart.tzinfo:
            return value
        tzinfo = self._tzinfo or local_timezone()
        return value.astimezone(tzinfo).replace(tzinfo=None)

    def __iter__(self) -> Iterator[TemporalValue]:
        """Return an iterator as a traversal over instants in chronological order."""
        start = normalize_datetime(self._dtstart, self._tzinfo)
        yielded = 0
        try:
            for value in self._values():
                instant = normalize_datetime(value, self._tzinfo)
                if instant >= self._window_end:
                    return
                if instant < start:
                    continue
                if yielded >= self._max_instances:
                    _LOGGER.warning(
                        "Recurrence rule reached the limit of %d instances: %s",
                        self._max_instances,
                        self,
                    )
                    return
                yielded += 1
                yield TemporalValue(value)
        except TypeError as err:
            raise RecurrenceError(
                f"Error evaluating recurrence rule ({self}): {str(err)}"
            ) from err

    def __repr__(self) -> str:
        return (
            f"RecurIterable(dtstart={self._dtstart}, rule={self._rule!r}, "
            f"window_end={self._window_end})"
        )
