"""The calendar document consumed by the occurrence expansion.

A document is an ordered collection of components. Each component is tagged
with its `kind`, and only `VEVENT` components are expanded into occurrences.
Decoding of the raw calendar wire format happens upstream. This module builds
documents from structured input (python objects, dictionaries or JSON) and is
the point where malformed input becomes a `CalendarParseError`.

```python
from calexpand.document import CalendarDocument

document = CalendarDocument.from_json('''
{
  "components": [
    {
      "kind": "VEVENT",
      "start": "2024-01-01T09:00:00[America/New_York]",
      "duration": "PT1H",
      "rrule": {"freq": "WEEKLY", "count": 4},
      "properties": [{"name": "SUMMARY", "value": "Standup"}]
    }
  ]
}
''')
```
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
)

from .component import OpaqueComponent, parse_error
from .event import EventDefinition

__all__ = [
    "CalendarDocument",
    "Component",
]

_LOGGER = logging.getLogger(__name__)


_EVENT_TAG = "VEVENT"
_OPAQUE_TAG = "OPAQUE"


def _component_tag(value: Any) -> str | None:
    """Return the union member used to validate a component."""
    if isinstance(value, dict):
        kind = value.get("kind")
    else:
        kind = getattr(value, "kind", None)
    if kind is None:
        return None
    return _EVENT_TAG if kind == "VEVENT" else _OPAQUE_TAG


Component = Annotated[
    Union[
        Annotated[EventDefinition, Tag(_EVENT_TAG)],
        Annotated[OpaqueComponent, Tag(_OPAQUE_TAG)],
    ],
    Discriminator(_component_tag),
]
"""A component of a calendar document, discriminated by its kind.

Events are expanded and every other kind, including unknown extension
components, is kept as an opaque component.
"""


class CalendarDocument(BaseModel):
    """A parsed calendar document."""

    components: list[Component] = Field(default_factory=list)
    """Components in the order they appeared in the source."""

    model_config = ConfigDict(frozen=True)

    @property
    def events(self) -> list[EventDefinition]:
        """Return all event components in the document."""
        return [
            component
            for component in self.components
            if isinstance(component, EventDefinition)
        ]

    @classmethod
    def from_dict(cls, data: Any) -> CalendarDocument:
        """Build a document from python dictionaries and lists."""
        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise parse_error("document", err) from err

    @classmethod
    def from_json(cls, content: str | bytes) -> CalendarDocument:
        """Build a document from a JSON string."""
        _LOGGER.debug("Parsing calendar document of %d bytes", len(content))
        try:
            return cls.model_validate_json(content)
        except ValidationError as err:
            raise parse_error("document", err) from err
