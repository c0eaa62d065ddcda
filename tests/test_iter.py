"""Tests for the iter library."""

from __future__ import annotations

import datetime
import logging
import zoneinfo

import pytest

from calexpand.exceptions import RecurrenceError
from calexpand.iter import AllDayConverter, RecurIterable, SortableItemValue
from calexpand.types.recur import Frequency, Recur, Weekday, WeekdayValue
from calexpand.types.temporal import TemporalValue

UTC = datetime.timezone.utc
NEW_YORK = zoneinfo.ZoneInfo("America/New_York")
FAR_FUTURE = datetime.datetime(2100, 1, 1, tzinfo=UTC)


def test_all_day_converter() -> None:
    """Test datetimes are converted back into dates."""
    values = [datetime.datetime(2024, 1, 1), datetime.datetime(2024, 1, 2, 0, 0)]
    assert list(AllDayConverter(values)) == [
        datetime.date(2024, 1, 1),
        datetime.date(2024, 1, 2),
    ]


def test_sortable_item_value() -> None:
    """Test items are sorted by key only."""
    items = [SortableItemValue(3, "c"), SortableItemValue(1, "a"), SortableItemValue(2, "b")]
    assert [item.item for item in sorted(items)] == ["a", "b", "c"]


def test_open_ended_rule_stops_at_window_end() -> None:
    """Test an unbounded rule stops at the end of the window."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 1, 9, 0),
        Recur(freq=Frequency.DAILY),
        datetime.datetime(2024, 1, 5, tzinfo=UTC),
        tzinfo=UTC,
    )
    assert [value.value for value in recur] == [
        datetime.datetime(2024, 1, 1, 9, 0),
        datetime.datetime(2024, 1, 2, 9, 0),
        datetime.datetime(2024, 1, 3, 9, 0),
        datetime.datetime(2024, 1, 4, 9, 0),
    ]


def test_count_bounds_sequence() -> None:
    """Test the rule's own count ends the sequence before the window."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 1, 9, 0),
        Recur(freq=Frequency.WEEKLY, count=2),
        FAR_FUTURE,
        tzinfo=UTC,
    )
    assert len(list(recur)) == 2


def test_restartable() -> None:
    """Test each iteration produces a fresh sequence."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 1, 9, 0, tzinfo=NEW_YORK),
        Recur(freq=Frequency.DAILY, count=3),
        FAR_FUTURE,
    )
    first = list(recur)
    assert len(first) == 3
    assert list(recur) == first


def test_all_day_values() -> None:
    """Test all day rules emit dates."""
    recur = RecurIterable(
        datetime.date(2024, 12, 25),
        Recur(freq=Frequency.YEARLY),
        datetime.datetime(2027, 1, 1, tzinfo=UTC),
        tzinfo=UTC,
    )
    assert list(recur) == [
        TemporalValue(datetime.date(2024, 12, 25)),
        TemporalValue(datetime.date(2025, 12, 25)),
        TemporalValue(datetime.date(2026, 12, 25)),
    ]
    assert all(value.is_date_only for value in recur)


def test_does_not_start_before_start() -> None:
    """Test instants are never before the rule's anchor."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 3, 9, 0),
        Recur(freq=Frequency.WEEKLY, count=2, by_weekday=[WeekdayValue(Weekday.MONDAY)]),
        FAR_FUTURE,
        tzinfo=UTC,
    )
    assert [value.value for value in recur] == [
        datetime.datetime(2024, 1, 8, 9, 0),
        datetime.datetime(2024, 1, 15, 9, 0),
    ]


def test_max_instances(caplog: pytest.LogCaptureFixture) -> None:
    """Test the number of generated instants is capped."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 1, 9, 0),
        Recur(freq=Frequency.MINUTELY),
        FAR_FUTURE,
        tzinfo=UTC,
        max_instances=5,
    )
    with caplog.at_level(logging.WARNING):
        assert len(list(recur)) == 5
    assert "limit of 5 instances" in caplog.text


def test_invalid_rule_raises_recurrence_error() -> None:
    """Test errors from evaluating the rule are reported as RecurrenceError."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 1, 9, 0, tzinfo=NEW_YORK),
        Recur(freq=Frequency.DAILY, until=datetime.datetime(2024, 1, 5, 9, 0)),
        FAR_FUTURE,
    )
    with pytest.raises(RecurrenceError):
        list(recur)


def test_window_end_requires_timezone() -> None:
    """Test the window end must be on the common time scale."""
    with pytest.raises(ValueError):
        RecurIterable(
            datetime.datetime(2024, 1, 1, 9, 0),
            Recur(freq=Frequency.DAILY),
            datetime.datetime(2024, 1, 5),
        )


def test_window_start_skips_earlier_instants() -> None:
    """Test instants before the window start are skipped."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 1, 9, 0),
        Recur(freq=Frequency.DAILY),
        datetime.datetime(2024, 1, 6, tzinfo=UTC),
        tzinfo=UTC,
        window_start=datetime.datetime(2024, 1, 3, 9, 0, tzinfo=UTC),
    )
    assert [value.value for value in recur] == [
        datetime.datetime(2024, 1, 3, 9, 0),
        datetime.datetime(2024, 1, 4, 9, 0),
        datetime.datetime(2024, 1, 5, 9, 0),
    ]


def test_window_start_keeps_count_from_anchor() -> None:
    """Test the rule's count is applied from the anchor, not the window."""
    recur = RecurIterable(
        datetime.datetime(2024, 1, 1, 9, 0, tzinfo=NEW_YORK),
        Recur(freq=Frequency.DAILY, count=5),
        FAR_FUTURE,
        window_start=datetime.datetime(2024, 1, 4, tzinfo=NEW_YORK),
    )
    assert [value.value for value in recur] == [
        datetime.datetime(2024, 1, 4, 9, 0, tzinfo=NEW_YORK),
        datetime.datetime(2024, 1, 5, 9, 0, tzinfo=NEW_YORK),
    ]


def test_window_start_all_day() -> None:
    """Test an all day rule is fast-forwarded to the window."""
    recur = RecurIterable(
        datetime.date(2000, 7, 4),
        Recur(freq=Frequency.YEARLY),
        datetime.datetime(2026, 1, 1, tzinfo=UTC),
        tzinfo=UTC,
        window_start=datetime.datetime(2024, 1, 1, tzinfo=UTC),
    )
    assert list(recur) == [
        TemporalValue(datetime.date(2024, 7, 4)),
        TemporalValue(datetime.date(2025, 7, 4)),
    ]


def test_max_instances_ignores_instants_before_window(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test instants skipped before the window don't count against the limit."""
    recur = RecurIterable(
        datetime.datetime(2018, 1, 1, 9, 0),
        Recur(freq=Frequency.HOURLY),
        datetime.datetime(2024, 1, 10, tzinfo=UTC),
        tzinfo=UTC,
        max_instances=1000,
        window_start=datetime.datetime(2024, 1, 3, tzinfo=UTC),
    )
    with caplog.at_level(logging.WARNING):
        assert len(list(recur)) == 168
    assert "limit" not in caplog.text


def test_window_start_requires_timezone() -> None:
    """Test the window start must be on the common time scale."""
    with pytest.raises(ValueError):
        RecurIterable(
            datetime.datetime(2024, 1, 1, 9, 0),
            Recur(freq=Frequency.DAILY),
            datetime.datetime(2024, 1, 5, tzinfo=UTC),
            window_start=datetime.datetime(2024, 1, 1),
        )
