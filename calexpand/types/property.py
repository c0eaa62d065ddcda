"""Descriptive properties of a calendar component.

A descriptive property is any property that describes an event rather than
placing it in time, e.g. a summary, location, organizer or an unknown
extension property. Their values are kept exactly as supplied and are not
interpreted by this library. For example, given a property of:

  ATTENDEE;ROLE=CHAIR:mailto:mrbig@example.com

The value would be represented as:

  Property(
    name='ATTENDEE',
    value='mailto:mrbig@example.com',
    params=(PropertyParameter(name='ROLE', values=('CHAIR',)),),
  )
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Property",
    "PropertyParameter",
]


@dataclass(frozen=True)
class PropertyParameter:
    """A parameter attached to a property."""

    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Property:
    """A single (name, value) pair with optional parameters."""

    name: str
    value: str
    params: tuple[PropertyParameter, ...] = ()

    def get_parameter_value(self, name: str) -> str | None:
        """Return the first value of the named parameter, if present."""
        for param in self.params:
            if param.name.upper() == name.upper() and param.values:
                return param.values[0]
        return None
