"""Base models for calendar components.

A calendar document is an ordered collection of components. Only events are
expanded into occurrences; the other component kinds are carried along as an
opaque bag of properties so that a document can be ingested as a whole.

Components are pydantic models. Validation failures are reported as a
`CalendarParseError` with the pydantic details attached, so that callers only
need to deal with a single error type when a document can't be built.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import CalendarParseError
from .types.property import Property

__all__ = [
    "ComponentModel",
    "OpaqueComponent",
    "parse_error",
]

_LOGGER = logging.getLogger(__name__)


def parse_error(name: str, err: ValidationError) -> CalendarParseError:
    """Return a CalendarParseError describing the pydantic validation error."""
    _LOGGER.debug("Failed to parse component %s", err)
    message = [f"Failed to parse calendar {name}"]
    for error in err.errors():
        if msg := error.get("msg"):
            message.append(msg)
    return CalendarParseError(": ".join(message), detailed_error=str(err))


def _component_name(model: type[BaseModel], data: dict[str, Any]) -> str:
    """Return the calendar component name, e.g. VEVENT, used in error messages."""
    if isinstance(kind := data.get("kind"), str):
        return kind
    if (field := model.model_fields.get("kind")) and isinstance(field.default, str):
        return field.default
    return model.__name__.upper()


class ComponentModel(BaseModel):
    """Abstract class for a calendar component model."""

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as err:
            raise parse_error(
                f"{_component_name(type(self), data)} component", err
            ) from err

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )


class OpaqueComponent(ComponentModel):
    """A component that is not expanded into occurrences (e.g. a todo).

    Any component kind other than an event is accepted, including extension
    components.
    """

    kind: str

    properties: list[Property] = Field(default_factory=list)
    """Properties of the component, kept as supplied."""

    @field_validator("kind")
    @classmethod
    def _not_event(cls, value: str) -> str:
        """Verify the component is not an event."""
        if value == "VEVENT":
            raise ValueError("Events must be parsed as an event component")
        return value
