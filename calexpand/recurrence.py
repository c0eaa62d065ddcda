"""Builds the set of occurrence periods of one event within a query window.

The recurrence set of an event is generated by gathering the event start, the
instants of its recurrence rule and its recurrence dates, then removing any
instant produced by its exclusion rule or listed in its exclusion dates.
Every surviving instant becomes a period with the duration of the original
event, and only periods overlapping the query window are kept.

Exclusions match by exact value: a date only removes a date, and a date-time
only removes a date-time in the same timezone at the same instant. It does not
matter whether an instant came from the rule or from an explicit date.
"""

from __future__ import annotations

from collections.abc import Iterable
import datetime
import logging
from typing import Any

from .event import EventDefinition
from .exceptions import RecurrenceError
from .iter import DEFAULT_MAX_INSTANCES, RecurIterable
from .timespan import Timespan
from .types.period import OccurrencePeriod, QueryWindow
from .types.recur import Recur
from .types.temporal import TemporalValue, is_date_only_consistent
from .util import local_timezone

__all__ = ["build_occurrences"]

_LOGGER = logging.getLogger(__name__)

_WINDOW_SLACK = datetime.timedelta(days=1)


def _adjust_until(rule: Recur, dtstart: TemporalValue) -> Recur:
    """Return the rule with an UNTIL value comparable to the start."""
    if (until := rule.until) is None:
        return rule
    if dtstart.is_date_only:
        if isinstance(until, datetime.datetime):
            # Fix invalid rules where UNTIL value is DATE-TIME but DTSTART is DATE
            return rule.model_copy(update={"until": until.date()})
        return rule
    if not isinstance(until, datetime.datetime):
        raise RecurrenceError(
            f"DTSTART was DATE-TIME but UNTIL was DATE: {dtstart}, {until}"
        )
    assert isinstance(dtstart.value, datetime.datetime)
    if dtstart.is_floating:
        if until.tzinfo is not None:
            raise RecurrenceError(
                f"DTSTART is floating but UNTIL has a timezone: {dtstart}, {until}"
            )
        return rule
    if until.tzinfo is None:
        return rule.model_copy(update={"until": until.replace(tzinfo=dtstart.value.tzinfo)})
    return rule


def _date_values(
    event: EventDefinition, name: str, values: Iterable[Any]
) -> list[TemporalValue]:
    """Return the values as TemporalValues, failing on values that aren't dates."""
    result = []
    for value in values:
        if not isinstance(value, datetime.date):
            raise RecurrenceError(
                f"Event '{event.uid}' has unusable {name} value: {value!r}"
            )
        result.append(TemporalValue(value))
    return result


def _recurrence_dates(
    event: EventDefinition, dtstart: TemporalValue
) -> list[TemporalValue]:
    """Return the explicit recurrence dates, verifying they match the start."""
    values = []
    for value in _date_values(event, "recurrence date", event.rdate):
        if not is_date_only_consistent(value, dtstart):
            raise RecurrenceError(
                f"Recurrence date {value} must be the same value type as the start {dtstart}"
            )
        if value.is_floating != dtstart.is_floating:
            raise RecurrenceError(
                f"Recurrence date {value} can't be compared with the start {dtstart}"
            )
        values.append(value)
    return values


def _rule_instants(
    rule: Recur,
    base: OccurrencePeriod,
    window: Timespan,
    tzinfo: datetime.tzinfo,
    max_instances: int,
) -> Iterable[TemporalValue]:
    # Instants starting more than one event length before the window can't
    # produce an overlapping occurrence. A day of slack covers offset changes.
    return RecurIterable(
        base.start.value,
        _adjust_until(rule, base.start),
        window.end,
        tzinfo=tzinfo,
        max_instances=max_instances,
        window_start=window.start - base.duration - _WINDOW_SLACK,
    )


def build_occurrences(
    event: EventDefinition,
    window: QueryWindow,
    tzinfo: datetime.tzinfo | None = None,
    max_instances: int = DEFAULT_MAX_INSTANCES,
) -> set[OccurrencePeriod]:
    """Return the periods of the event that overlap the query window.

    Floating and all day values are compared to the window as if viewed from
    `tzinfo`, the local timezone by default. The returned periods are never
    truncated to the window.
    """
    base = event.period
    tzinfo = tzinfo or local_timezone()
    window_span = window.timespan(tzinfo)

    candidates: set[TemporalValue] = {base.start}
    if event.recurring:
        if event.rrule:
            candidates.update(
                _rule_instants(event.rrule, base, window_span, tzinfo, max_instances)
            )
        candidates.update(_recurrence_dates(event, base.start))

    removals = set(_date_values(event, "exclusion date", event.exdate))
    if event.exrule:
        removals.update(
            _rule_instants(event.exrule, base, window_span, tzinfo, max_instances)
        )

    result: set[OccurrencePeriod] = set()
    for instant in candidates - removals:
        try:
            period = base.shift(instant)
        except (ValueError, TypeError) as err:
            raise RecurrenceError(
                f"Unable to create occurrence of event '{event.uid}' at {instant}: {err}"
            ) from err
        if period.timespan(tzinfo).intersects(window_span):
            result.add(period)
    _LOGGER.debug(
        "Event '%s' has %d candidates, %d exclusions, %d occurrences in window",
        event.uid,
        len(candidates),
        len(removals),
        len(result),
    )
    return result
