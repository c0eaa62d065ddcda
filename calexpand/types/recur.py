"""Implementation of recurrence rules for calendar events.

A recurrence rule arrives already decoded into its parts (frequency, interval,
count or until bound and any by-rule constraints). This library holds those
parts in a pydantic model and relies on the `dateutil.rrule` implementation for
the actual repetition of dates and times.

```python
import datetime
from calexpand.types.recur import Frequency, Recur, Weekday, WeekdayValue

rule = Recur(
    freq=Frequency.WEEKLY,
    count=3,
    by_weekday=[WeekdayValue(Weekday.MONDAY), WeekdayValue(Weekday.WEDNESDAY)],
)
print(list(rule.as_rrule(datetime.datetime(2024, 1, 1, 9, 0))))
```

The above example will output Monday January 1st, Wednesday January 3rd and
Monday January 8th at 9am.
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime
import enum
from typing import Annotated, Optional, Self, Union

from dateutil import rrule
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from ..util import parse_date_and_datetime

__all__ = [
    "Frequency",
    "Weekday",
    "WeekdayValue",
    "Recur",
]


class Weekday(str, enum.Enum):
    """Corresponds to a day of the week."""

    SUNDAY = "SU"
    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class WeekdayValue:
    """Holds a weekday value and optional occurrence value."""

    weekday: Weekday
    """Day of the week value."""

    occurrence: Optional[int] = None
    """The occurrence value indicates the nth occurrence.

    Indicates the nth occurrence of a specific day within the MONTHLY or
    YEARLY rule. For example +1 represents the first Monday of the
    month, or -1 represents the last Monday of the month.
    """

    def __str__(self) -> str:
        """Return the WeekdayValue as an encoded string."""
        return f"{self.occurrence or ''}{self.weekday}"

    def as_rrule_weekday(self) -> rrule.weekday:
        """Convert the occurrence to a weekday value."""
        wd = RRULE_WEEKDAY[self.weekday]
        if self.occurrence is None:
            return wd
        return wd(self.occurrence)


class Frequency(str, enum.Enum):
    """Type of recurrence rule."""

    SECONDLY = "SECONDLY"
    MINUTELY = "MINUTELY"
    HOURLY = "HOURLY"

    DAILY = "DAILY"
    """Repeating events based on an interval of a day or more."""

    WEEKLY = "WEEKLY"
    """Repeating events based on an interval of a week or more."""

    MONTHLY = "MONTHLY"
    """Repeating events based on an interval of a month or more."""

    YEARLY = "YEARLY"
    """Repeating events based on an interval of a year or more."""


RRULE_FREQ = {
    Frequency.SECONDLY: rrule.SECONDLY,
    Frequency.MINUTELY: rrule.MINUTELY,
    Frequency.HOURLY: rrule.HOURLY,
    Frequency.DAILY: rrule.DAILY,
    Frequency.WEEKLY: rrule.WEEKLY,
    Frequency.MONTHLY: rrule.MONTHLY,
    Frequency.YEARLY: rrule.YEARLY,
}
RRULE_WEEKDAY = {
    Weekday.MONDAY: rrule.MO,
    Weekday.TUESDAY: rrule.TU,
    Weekday.WEDNESDAY: rrule.WE,
    Weekday.THURSDAY: rrule.TH,
    Weekday.FRIDAY: rrule.FR,
    Weekday.SATURDAY: rrule.SA,
    Weekday.SUNDAY: rrule.SU,
}


def _or_none(values: list[int]) -> list[int] | None:
    return values if values else None


class Recur(BaseModel):
    """A decoded recurrence rule specification.

    The by properties reduce or limit the number of occurrences generated
    within each period of the frequency.
    """

    freq: Frequency

    until: Annotated[
        Union[datetime.datetime, datetime.date, None],
        BeforeValidator(parse_date_and_datetime),
    ] = None
    """The inclusive end date of the recurrence, or the last instance."""

    count: Optional[int] = Field(default=None, ge=1)
    """The number of occurrences to bound the recurrence."""

    interval: int = Field(default=1, ge=1)
    """Interval at which the recurrence rule repeats."""

    by_weekday: list[WeekdayValue] = Field(alias="byday", default_factory=list)
    """Supported days of the week."""

    by_month_day: list[int] = Field(alias="bymonthday", default_factory=list)
    """Days of the month between 1 to 31, or negative from the end of the month."""

    by_month: list[int] = Field(alias="bymonth", default_factory=list)
    """Month number between 1 and 12."""

    by_year_day: list[int] = Field(alias="byyearday", default_factory=list)
    """Days of the year between 1 and 366, or negative from the end of the year."""

    by_week_no: list[int] = Field(alias="byweekno", default_factory=list)
    """ISO week numbers of the year."""

    by_hour: list[int] = Field(alias="byhour", default_factory=list)
    by_minute: list[int] = Field(alias="byminute", default_factory=list)
    by_second: list[int] = Field(alias="bysecond", default_factory=list)

    by_setpos: list[int] = Field(alias="bysetpos", default_factory=list)
    """Values that corresponds to the nth occurrence within the set of instances."""

    week_start: Optional[Weekday] = Field(alias="wkst", default=None)
    """The day on which the work week starts."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
    )

    @model_validator(mode="after")
    def _validate_bounds(self) -> Self:
        """Validate that only one of count or until bound the rule."""
        if self.count is not None and self.until is not None:
            raise ValueError("Recurrence rule may only specify one of COUNT or UNTIL")
        return self

    def as_rrule(self, dtstart: datetime.datetime | datetime.date) -> rrule.rrule:
        """Create a dateutil rrule anchored at the specified start."""
        byweekday: list[rrule.weekday] | None = None
        if self.by_weekday:
            byweekday = [weekday.as_rrule_weekday() for weekday in self.by_weekday]
        return rrule.rrule(
            freq=RRULE_FREQ[self.freq],
            dtstart=dtstart,
            interval=self.interval,
            wkst=RRULE_WEEKDAY[self.week_start] if self.week_start else None,
            count=self.count,
            until=self.until,
            bysetpos=_or_none(self.by_setpos),
            bymonth=_or_none(self.by_month),
            bymonthday=_or_none(self.by_month_day),
            byyearday=_or_none(self.by_year_day),
            byweekno=_or_none(self.by_week_no),
            byweekday=byweekday,
            byhour=_or_none(self.by_hour),
            byminute=_or_none(self.by_minute),
            bysecond=_or_none(self.by_second),
        )
