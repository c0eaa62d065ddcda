"""Library for expanding calendar events into concrete occurrences.

Given a calendar document and a query window, the library produces every
occurrence of every event that overlaps the window. Recurring events are
expanded using their recurrence rule, recurrence dates, exclusion rule and
exclusion dates, and each occurrence is returned as a standalone record
with the event's descriptive properties.
"""

__all__ = [
    "component",
    "document",
    "event",
    "exceptions",
    "iter",
    "materialize",
    "occurrence",
    "processor",
    "recurrence",
    "timeline",
    "timespan",
    "types",
    "util",
]
