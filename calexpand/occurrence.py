"""A single concrete occurrence of an event.

An occurrence is a standalone record: it holds its own start and end and a copy
of the descriptive properties of the event it came from, without any recurrence
rules or a reference back to the event. Two occurrences with the same start,
end and properties are the same occurrence.
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime

from .timespan import Timespan
from .types.property import Property
from .types.temporal import TemporalValue

__all__ = ["Occurrence"]


@dataclass(frozen=True)
class Occurrence:
    """A materialized occurrence of an event."""

    start: TemporalValue
    end: TemporalValue
    properties: tuple[Property, ...] = ()

    @property
    def dtstart(self) -> datetime.date | datetime.datetime:
        """Return the start as a date or datetime."""
        return self.start.value

    @property
    def dtend(self) -> datetime.date | datetime.datetime:
        """Return the end as a date or datetime."""
        return self.end.value

    @property
    def all_day(self) -> bool:
        """Return True if the occurrence covers whole days."""
        return self.start.is_date_only

    def get(self, name: str) -> str | None:
        """Return the value of the first property with this name."""
        for prop in self.properties:
            if prop.name.upper() == name.upper():
                return prop.value
        return None

    @property
    def uid(self) -> str | None:
        """Return the uid of the event this occurrence came from."""
        return self.get("UID")

    @property
    def summary(self) -> str | None:
        """Return the summary of the occurrence."""
        return self.get("SUMMARY")

    def timespan_of(self, tzinfo: datetime.tzinfo | None = None) -> Timespan:
        """Return a timespan representing the occurrence start and end."""
        return Timespan.of(self.start.value, self.end.value, tzinfo)
