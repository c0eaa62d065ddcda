"""Turns an occurrence period of an event into a standalone occurrence."""

from __future__ import annotations

from .event import EventDefinition
from .occurrence import Occurrence
from .types.period import OccurrencePeriod
from .types.temporal import TemporalValue

__all__ = ["materialize"]

# Properties that place an event in time are never copied onto an occurrence.
RECURRENCE_PROPERTIES = frozenset(
    {
        "DTSTART",
        "DTEND",
        "DURATION",
        "RRULE",
        "RDATE",
        "EXRULE",
        "EXDATE",
    }
)


def materialize(event: EventDefinition, period: OccurrencePeriod) -> Occurrence:
    """Return the occurrence of the event over the period.

    The start and end are expressed in the timezone used by the event's own
    start. Descriptive properties are copied in their original order.
    """
    reference = TemporalValue(event.dtstart)  # type: ignore[arg-type]
    return Occurrence(
        start=period.start.with_disposition_of(reference),
        end=period.end.with_disposition_of(reference),
        properties=tuple(
            prop
            for prop in event.properties
            if prop.name.upper() not in RECURRENCE_PROPERTIES
        ),
    )
