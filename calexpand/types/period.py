"""Library for occurrence periods and query windows."""

from __future__ import annotations

from dataclasses import dataclass
import datetime

from ..timespan import Timespan
from .temporal import TemporalValue, is_date_only_consistent

__all__ = [
    "OccurrencePeriod",
    "QueryWindow",
]


def _check_comparable(start: TemporalValue, end: TemporalValue) -> None:
    if not is_date_only_consistent(start, end):
        raise ValueError(
            f"Period start '{start}' and end '{end}' must both be dates "
            "or both be date-times"
        )
    if start.is_floating != end.is_floating:
        raise ValueError(
            f"Period start '{start}' and end '{end}' must both be floating "
            "or both have a timezone"
        )


@dataclass(frozen=True)
class OccurrencePeriod:
    """A half-open interval [start, end) of a single occurrence."""

    start: TemporalValue
    end: TemporalValue

    def __post_init__(self) -> None:
        """Validate the start and end can be combined."""
        _check_comparable(self.start, self.end)
        if self.end.value < self.start.value:  # type: ignore[operator]
            raise ValueError(f"Period end '{self.end}' is before start '{self.start}'")

    @classmethod
    def of(  # pylint: disable=invalid-name
        cls,
        start: TemporalValue,
        end: TemporalValue | None = None,
        duration: datetime.timedelta | None = None,
    ) -> OccurrencePeriod:
        """Create a period from an explicit end or from a duration."""
        if end is not None and duration is not None:
            raise ValueError("Only one of end or duration may be set")
        if end is None:
            if duration is None:
                raise ValueError("Period requires either an end or a duration")
            end = start + duration
        return OccurrencePeriod(start, end)

    @property
    def duration(self) -> datetime.timedelta:
        """Return the length of the period."""
        return self.end - self.start

    @property
    def is_date_only(self) -> bool:
        """Return True if the period covers whole days."""
        return self.start.is_date_only

    def shift(self, new_start: TemporalValue) -> OccurrencePeriod:
        """Return a period of the same duration that begins at the new start."""
        return OccurrencePeriod(new_start, new_start + self.duration)

    def timespan(self, tzinfo: datetime.tzinfo | None = None) -> Timespan:
        """Return the period on the common time scale.

        Floating and date values are interpreted in `tzinfo`.
        """
        return Timespan.of(self.start.value, self.end.value, tzinfo)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


@dataclass(frozen=True)
class QueryWindow:
    """The caller supplied range of time used to select occurrences.

    The end is exclusive.
    """

    start: datetime.date | datetime.datetime
    end: datetime.date | datetime.datetime

    def timespan(self, tzinfo: datetime.tzinfo | None = None) -> Timespan:
        """Return the window on the common time scale."""
        return Timespan.of(self.start, self.end, tzinfo)
