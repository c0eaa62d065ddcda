"""A grouping of component properties that describe a calendar event.

An event has a start that is either a date and time or just a day, and an
end given either as an explicit end or as a duration. An event may repeat
using a recurrence rule and/or explicit recurrence dates, with instances
removed by an exclusion rule and/or explicit exclusion dates.

Everything else about the event (summary, location, attendees, uid, unknown
extension properties) is held as an ordered list of descriptive properties
that are copied verbatim onto each occurrence.

```python
import datetime
from calexpand.event import EventDefinition
from calexpand.types import Property

event = EventDefinition(
    dtstart=datetime.datetime(2024, 1, 1, 7, 0),
    dtend=datetime.datetime(2024, 1, 1, 7, 30),
    properties=[Property("SUMMARY", "Morning exercise")],
)
print("The event duration is: ", event.period.duration)
```
"""

from __future__ import annotations

import datetime
import logging
from typing import Annotated, Literal, Optional, Union

from pydantic import BeforeValidator, Field

from .component import ComponentModel
from .exceptions import RecurrenceError
from .types.period import OccurrencePeriod
from .types.property import Property
from .types.recur import Recur
from .types.temporal import TemporalValue
from .util import (
    parse_date_and_datetime_or_str,
    parse_date_and_datetime_or_str_list,
)

__all__ = ["EventDefinition"]

_LOGGER = logging.getLogger(__name__)

_DateValue = Union[datetime.datetime, datetime.date, str]
_ONE_DAY = datetime.timedelta(days=1)


class EventDefinition(ComponentModel):
    """A single, possibly recurring, event on a calendar.

    An event definition is immutable once it is built.
    """

    kind: Literal["VEVENT"] = "VEVENT"

    dtstart: Annotated[
        Optional[_DateValue],
        BeforeValidator(parse_date_and_datetime_or_str),
    ] = Field(alias="start", default=None)
    """The start time or start day of the event.

    A value that can't be read as a date is kept so that the event is reported
    as unusable when it is expanded, without failing the whole document.
    """

    dtend: Annotated[
        Optional[_DateValue],
        BeforeValidator(parse_date_and_datetime_or_str),
    ] = Field(alias="end", default=None)
    """The end time or end day of the event.

    This may be specified as an explicit date. Alternatively, a duration
    can be used instead.
    """

    duration: Optional[datetime.timedelta] = None
    """The duration of the event as an alternative to an explicit end date/time."""

    rrule: Optional[Recur] = None
    """A recurrence rule specification.

    The recurrence set is generated by gathering the start, the rrule and rdate
    values then excluding any times produced by the exrule or listed in exdate.
    """

    rdate: Annotated[
        list[_DateValue],
        BeforeValidator(parse_date_and_datetime_or_str_list),
    ] = Field(default_factory=list)
    """Defines the list of additional date/time values for recurring events."""

    exrule: Optional[Recur] = None
    """A recurrence rule whose instances are removed from the recurrence set."""

    exdate: Annotated[
        list[_DateValue],
        BeforeValidator(parse_date_and_datetime_or_str_list),
    ] = Field(default_factory=list)
    """Defines the list of exceptions for recurring events.

    An exception only removes an instance with exactly the same value, that is
    the same kind of value (date or date-time) in the same timezone.
    """

    properties: list[Property] = Field(default_factory=list)
    """Descriptive properties, in their original order."""

    def get(self, name: str) -> str | None:
        """Return the value of the first descriptive property with this name."""
        for prop in self.properties:
            if prop.name.upper() == name.upper():
                return prop.value
        return None

    @property
    def uid(self) -> str | None:
        """Return the globally unique identifier for the event, if set."""
        return self.get("UID")

    @property
    def summary(self) -> str | None:
        """Return the short summary or subject for the event, if set."""
        return self.get("SUMMARY")

    @property
    def recurring(self) -> bool:
        """Return true if this event is recurring.

        A recurring event is evaluated specially: the data model has a single
        event, but it is expanded into one occurrence per instance.
        """
        if self.rrule or self.rdate:
            return True
        return False

    @property
    def period(self) -> OccurrencePeriod:
        """Return the period covered by the first instance of the event.

        Raises a RecurrenceError if the start and end of the event can't be
        used to place the event in time.
        """
        if not isinstance(self.dtstart, datetime.date):
            raise RecurrenceError(
                f"Event '{self.uid}' has no usable start value: {self.dtstart!r}"
            )
        start = TemporalValue(self.dtstart)
        if self.duration is not None and self.dtend is not None:
            raise RecurrenceError(
                f"Event '{self.uid}' may only set one of end or duration"
            )
        if self.duration is not None:
            if self.duration < datetime.timedelta(0):
                raise RecurrenceError(
                    f"Expected duration to be positive but was {self.duration}"
                )
            if start.is_date_only and (
                self.duration.seconds or self.duration.microseconds
            ):
                raise RecurrenceError(
                    f"Event with start date expects duration in days only: {self.duration}"
                )
            end = start + self.duration
        elif self.dtend is not None:
            if not isinstance(self.dtend, datetime.date):
                raise RecurrenceError(
                    f"Event '{self.uid}' has no usable end value: {self.dtend!r}"
                )
            end = TemporalValue(self.dtend)
        elif start.is_date_only:
            end = start + _ONE_DAY
        else:
            end = start
        try:
            return OccurrencePeriod(start, end)
        except ValueError as err:
            _LOGGER.debug("Unusable start/end for event %s: %s", self.uid, err)
            raise RecurrenceError(f"Event '{self.uid}' has invalid period: {err}") from err
