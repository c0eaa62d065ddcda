"""A Timeline is a chronological view of materialized occurrences.

The result of expanding a document is a set. A timeline orders those
occurrences by start and end and supports methods to scan ranges of
occurrences like returning all occurrences happening today or after a
specific date.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import datetime
import heapq

from .iter import SortableItemValue
from .occurrence import Occurrence
from .timespan import Timespan
from .util import local_timezone, normalize_datetime

__all__ = ["Timeline", "calendar_timeline"]


class Timeline(Iterable[Occurrence]):
    """A set of occurrences on a calendar in chronological order.

    All occurrences are ordered as if the attendee is viewing from the
    specified timezone. For example, this affects the order that all day
    occurrences are returned.
    """

    def __init__(
        self, occurrences: Iterable[Occurrence], tzinfo: datetime.tzinfo
    ) -> None:
        """Initialize Timeline."""
        self._tzinfo = tzinfo
        heap = [
            SortableItemValue(occurrence.timespan_of(tzinfo), occurrence)
            for occurrence in occurrences
        ]
        heapq.heapify(heap)
        self._items: list[SortableItemValue[Timespan, Occurrence]] = []
        while heap:
            self._items.append(heapq.heappop(heap))

    def __iter__(self) -> Iterator[Occurrence]:
        """Return an iterator as a traversal over occurrences in chronological order."""
        for item in self._items:
            yield item.item

    def __len__(self) -> int:
        return len(self._items)

    def overlapping(
        self,
        start: datetime.date | datetime.datetime,
        end: datetime.date | datetime.datetime,
    ) -> Iterator[Occurrence]:
        """Return an iterator containing occurrences active during the timespan.

        The end date is exclusive.
        """
        timespan = Timespan.of(start, end, self._tzinfo)
        for item in self._items:
            if item.key.intersects(timespan):
                yield item.item
            elif item.key.start >= timespan.end:
                break

    def start_after(
        self,
        instant: datetime.datetime | datetime.date,
    ) -> Iterator[Occurrence]:
        """Return an iterator containing occurrences starting after the specified time."""
        instant_value = normalize_datetime(instant, self._tzinfo)
        for item in self._items:
            if item.key.start > instant_value:
                yield item.item

    def on_date(self, day: datetime.date) -> Iterator[Occurrence]:
        """Return an iterator containing all occurrences active on the specified day."""
        return self.overlapping(day, day + datetime.timedelta(days=1))

    def today(self) -> Iterator[Occurrence]:
        """Return an iterator containing all occurrences active today."""
        return self.on_date(datetime.datetime.now(tz=self._tzinfo).date())


def calendar_timeline(
    occurrences: Iterable[Occurrence], tzinfo: datetime.tzinfo | None = None
) -> Timeline:
    """Create a timeline for occurrences viewed from the specified timezone."""
    return Timeline(occurrences, tzinfo or local_timezone())
