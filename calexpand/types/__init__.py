"""Library for value types used when expanding calendar events."""

from .period import OccurrencePeriod, QueryWindow
from .property import Property, PropertyParameter
from .recur import Frequency, Recur, Weekday, WeekdayValue
from .temporal import TemporalValue, ZoneDisposition, ZoneKind, is_date_only_consistent

__all__ = [
    "Frequency",
    "OccurrencePeriod",
    "Property",
    "PropertyParameter",
    "QueryWindow",
    "Recur",
    "TemporalValue",
    "Weekday",
    "WeekdayValue",
    "ZoneDisposition",
    "ZoneKind",
    "is_date_only_consistent",
]
