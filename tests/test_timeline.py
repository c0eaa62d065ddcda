"""Tests for the timeline library."""

from __future__ import annotations

import datetime
import zoneinfo

from freezegun import freeze_time

from calexpand.document import CalendarDocument
from calexpand.event import EventDefinition
from calexpand.processor import get_events
from calexpand.timeline import calendar_timeline
from calexpand.types import Frequency, Property, QueryWindow, Recur

TZ = zoneinfo.ZoneInfo("America/Regina")

DOCUMENT = CalendarDocument(
    components=[
        EventDefinition(
            dtstart=datetime.date(2024, 1, 2),
            rrule=Recur(freq=Frequency.DAILY, count=3),
            properties=[Property("SUMMARY", "Vacation")],
        ),
        EventDefinition(
            dtstart=datetime.datetime(2024, 1, 2, 8, 0, tzinfo=TZ),
            dtend=datetime.datetime(2024, 1, 2, 9, 0, tzinfo=TZ),
            rrule=Recur(freq=Frequency.DAILY, count=3),
            properties=[Property("SUMMARY", "Coffee")],
        ),
        EventDefinition(
            dtstart=datetime.datetime(2024, 1, 1, 17, 0),
            dtend=datetime.datetime(2024, 1, 1, 18, 0),
            properties=[Property("SUMMARY", "Dinner")],
        ),
    ]
)
WINDOW = QueryWindow(datetime.date(2024, 1, 1), datetime.date(2024, 2, 1))


def summaries(occurrences: object) -> list[tuple[str | None, str]]:
    """Return the summary and start of each occurrence."""
    return [
        (occurrence.summary, occurrence.dtstart.isoformat())  # type: ignore[attr-defined]
        for occurrence in occurrences  # type: ignore[attr-defined]
    ]


def test_chronological_order() -> None:
    """Test occurrences are returned in order of start then end."""
    timeline = calendar_timeline(get_events(WINDOW, DOCUMENT, tzinfo=TZ), TZ)
    assert len(timeline) == 7
    assert summaries(timeline) == [
        ("Dinner", "2024-01-01T17:00:00"),
        ("Vacation", "2024-01-02"),
        ("Coffee", "2024-01-02T08:00:00-06:00"),
        ("Vacation", "2024-01-03"),
        ("Coffee", "2024-01-03T08:00:00-06:00"),
        ("Vacation", "2024-01-04"),
        ("Coffee", "2024-01-04T08:00:00-06:00"),
    ]


def test_on_date() -> None:
    """Test occurrences active on a specific day."""
    timeline = calendar_timeline(get_events(WINDOW, DOCUMENT, tzinfo=TZ), TZ)
    assert summaries(timeline.on_date(datetime.date(2024, 1, 3))) == [
        ("Vacation", "2024-01-03"),
        ("Coffee", "2024-01-03T08:00:00-06:00"),
    ]


def test_overlapping() -> None:
    """Test occurrences overlapping a range of time."""
    timeline = calendar_timeline(get_events(WINDOW, DOCUMENT, tzinfo=TZ), TZ)
    assert summaries(
        timeline.overlapping(
            datetime.datetime(2024, 1, 2, 8, 30), datetime.datetime(2024, 1, 2, 12, 0)
        )
    ) == [
        ("Vacation", "2024-01-02"),
        ("Coffee", "2024-01-02T08:00:00-06:00"),
    ]


def test_start_after() -> None:
    """Test occurrences starting after an instant."""
    timeline = calendar_timeline(get_events(WINDOW, DOCUMENT, tzinfo=TZ), TZ)
    assert summaries(timeline.start_after(datetime.datetime(2024, 1, 4, 0, 0))) == [
        ("Coffee", "2024-01-04T08:00:00-06:00"),
    ]


@freeze_time("2024-01-04 18:00:00")
def test_today() -> None:
    """Test occurrences active today."""
    timeline = calendar_timeline(get_events(WINDOW, DOCUMENT, tzinfo=TZ), TZ)
    assert summaries(timeline.today()) == [
        ("Vacation", "2024-01-04"),
        ("Coffee", "2024-01-04T08:00:00-06:00"),
    ]
