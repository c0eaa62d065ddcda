"""Expands all events of a calendar document into occurrences.

This is the entry point of the library. Each event in the document is expanded
on its own: an event that can't be expanded is reported and contributes no
occurrences, and the rest of the document is still processed. Components that
are not events are ignored.

```python
import datetime
from calexpand.processor import get_events
from calexpand.types import QueryWindow

window = QueryWindow(datetime.datetime(2024, 1, 1), datetime.datetime(2024, 2, 1))
for occurrence in get_events(window, document):
    print(occurrence.dtstart, occurrence.summary)
```

Failures are sent to a reporter callback, which by default logs a warning.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import datetime
import enum
import logging

from .document import CalendarDocument
from .event import EventDefinition
from .exceptions import RecurrenceError
from .iter import DEFAULT_MAX_INSTANCES
from .materialize import materialize
from .occurrence import Occurrence
from .recurrence import build_occurrences
from .types.period import QueryWindow

__all__ = [
    "ErrorKind",
    "ComponentFailure",
    "ExpansionResult",
    "Reporter",
    "log_reporter",
    "expand_document",
    "get_events",
]

_LOGGER = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    """The kind of failure seen while expanding a single component."""

    RECURRENCE = "RecurrenceError"
    """The event's own temporal data was unusable."""

    UNEXPECTED = "UnexpectedFault"
    """Any other error raised while expanding the component."""


@dataclass(frozen=True)
class ComponentFailure:
    """Describes a component that could not be expanded."""

    kind: ErrorKind
    index: int
    """Position of the component in the document."""

    uid: str | None
    message: str
    error: Exception = field(compare=False, repr=False)


Reporter = Callable[[ComponentFailure], None]
"""A sink for failures, invoked once per failed component."""


def log_reporter(failure: ComponentFailure) -> None:
    """Report a failed component to the log."""
    _LOGGER.warning(
        "Failed to process component %d (uid=%s) with %s: %s",
        failure.index,
        failure.uid,
        failure.kind.value,
        failure.message,
        exc_info=failure.error if failure.kind == ErrorKind.UNEXPECTED else None,
    )


@dataclass
class ExpansionResult:
    """The occurrences of a document and the components that failed."""

    occurrences: set[Occurrence] = field(default_factory=set)
    failures: list[ComponentFailure] = field(default_factory=list)


def _expand_event(
    event: EventDefinition,
    window: QueryWindow,
    tzinfo: datetime.tzinfo | None,
    max_instances: int,
) -> set[Occurrence]:
    _LOGGER.debug("Processing event %s (%s)", event.uid, event.summary)
    return {
        materialize(event, period)
        for period in build_occurrences(
            event, window, tzinfo=tzinfo, max_instances=max_instances
        )
    }


def expand_document(
    document: CalendarDocument | None,
    window: QueryWindow,
    *,
    tzinfo: datetime.tzinfo | None = None,
    reporter: Reporter = log_reporter,
    max_instances: int = DEFAULT_MAX_INSTANCES,
) -> ExpansionResult:
    """Return all occurrences of events in the document that overlap the window.

    The document is never modified, and every call produces a new result.
    """
    result = ExpansionResult()
    if document is None:
        _LOGGER.warning("Calendar was empty, returning empty set")
        return result
    for index, component in enumerate(document.components):
        if not isinstance(component, EventDefinition):
            continue
        failure: ComponentFailure | None = None
        try:
            result.occurrences.update(
                _expand_event(component, window, tzinfo, max_instances)
            )
        except RecurrenceError as err:
            failure = ComponentFailure(
                ErrorKind.RECURRENCE, index, component.uid, str(err), err
            )
        except Exception as err:  # pylint: disable=broad-except
            failure = ComponentFailure(
                ErrorKind.UNEXPECTED, index, component.uid, str(err), err
            )
        if failure is not None:
            result.failures.append(failure)
            reporter(failure)
    return result


def get_events(
    window: QueryWindow,
    document: CalendarDocument | None,
    *,
    tzinfo: datetime.tzinfo | None = None,
    reporter: Reporter = log_reporter,
    max_instances: int = DEFAULT_MAX_INSTANCES,
) -> set[Occurrence]:
    """Return the set of occurrences of all events that overlap the window."""
    return expand_document(
        document,
        window,
        tzinfo=tzinfo,
        reporter=reporter,
        max_instances=max_instances,
    ).occurrences
