"""Library for date and date-time values with an explicit timezone disposition.

A calendar value is either a date (an all day value with no time of day) or a
date-time. A date-time is either floating (local time wherever the attendee
is), fixed to a named timezone, or in UTC. Python `datetime` values already
carry all of that, but compare aware values purely by instant. A
`TemporalValue` compares the way calendar properties are compared: two values
are equal only when they agree on the instant, the date-only flag and the
timezone disposition.

```python
import datetime
import zoneinfo
from calexpand.types import TemporalValue

utc = TemporalValue(datetime.datetime(2024, 1, 1, 14, 0, tzinfo=datetime.UTC))
new_york = TemporalValue(
    datetime.datetime(2024, 1, 1, 9, 0, tzinfo=zoneinfo.ZoneInfo("America/New_York"))
)
assert utc != new_york
```
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime
import enum
from typing import Any

from ..util import normalize_datetime

__all__ = [
    "ZoneKind",
    "ZoneDisposition",
    "TemporalValue",
    "is_date_only_consistent",
]


class ZoneKind(str, enum.Enum):
    """How a value is placed in time."""

    FLOATING = "FLOATING"
    """Local time, or a date, with no timezone attached."""

    FIXED = "FIXED"
    """Local time in a specific named timezone."""

    UTC = "UTC"
    """An absolute time in UTC."""


@dataclass(frozen=True)
class ZoneDisposition:
    """The timezone disposition of a value."""

    kind: ZoneKind

    zone_id: str | None = None
    """The timezone name, only set for FIXED values."""

    @classmethod
    def of(cls, value: datetime.date | datetime.datetime) -> ZoneDisposition:
        """Return the disposition of a date or datetime."""
        if not isinstance(value, datetime.datetime) or value.tzinfo is None:
            return FLOATING
        if value.tzinfo is datetime.timezone.utc:
            return UTC
        zone_id = getattr(value.tzinfo, "key", None) or str(value.tzinfo)
        return ZoneDisposition(ZoneKind.FIXED, zone_id)

    def __str__(self) -> str:
        if self.zone_id:
            return f"{self.kind.value}({self.zone_id})"
        return self.kind.value


FLOATING = ZoneDisposition(ZoneKind.FLOATING)
UTC = ZoneDisposition(ZoneKind.UTC)


@dataclass(frozen=True, eq=False)
class TemporalValue:
    """A date or date-time value used as an occurrence boundary."""

    value: datetime.date | datetime.datetime

    def __post_init__(self) -> None:
        """Verify the value is a date or datetime."""
        if not isinstance(self.value, datetime.date):
            raise TypeError(
                f"Expected date or datetime value but got {type(self.value).__name__}"
            )

    @property
    def is_date_only(self) -> bool:
        """Return True if the value has no time of day."""
        return not isinstance(self.value, datetime.datetime)

    @property
    def disposition(self) -> ZoneDisposition:
        """Return the timezone disposition of the value."""
        return ZoneDisposition.of(self.value)

    @property
    def is_floating(self) -> bool:
        """Return True if the value is a date or a local time without a timezone."""
        return self.disposition.kind == ZoneKind.FLOATING

    def normalize(self, tzinfo: datetime.tzinfo | None = None) -> datetime.datetime:
        """Return an aware datetime on the common instant scale.

        Floating and date values are interpreted in `tzinfo`.
        """
        return normalize_datetime(self.value, tzinfo)

    def with_disposition_of(self, reference: TemporalValue) -> TemporalValue:
        """Return this value expressed in the timezone used by the reference.

        Only aware date-times are converted, anything else is returned as is.
        """
        if (
            self.is_date_only
            or reference.is_date_only
            or self.is_floating
            or reference.is_floating
            or self.disposition == reference.disposition
        ):
            return self
        assert isinstance(self.value, datetime.datetime)
        assert isinstance(reference.value, datetime.datetime)
        return TemporalValue(self.value.astimezone(reference.value.tzinfo))

    def _key(self) -> tuple[Any, ...]:
        value = self.value
        if isinstance(value, datetime.datetime) and value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        return (self.is_date_only, self.disposition, value)

    def __add__(self, other: Any) -> TemporalValue:
        if not isinstance(other, datetime.timedelta):
            return NotImplemented
        return TemporalValue(self.value + other)

    def __sub__(self, other: Any) -> datetime.timedelta:
        if not isinstance(other, TemporalValue):
            return NotImplemented
        return self.value - other.value  # type: ignore[operator, no-any-return]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TemporalValue):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{self.value.isoformat()} [{self.disposition}]"


def is_date_only_consistent(first: TemporalValue, second: TemporalValue) -> bool:
    """Return True if both values agree on being date-only."""
    return first.is_date_only == second.is_date_only
