"""Exceptions for calexpand library."""


class CalendarError(Exception):
    """Base exception for all calexpand errors."""


class CalendarParseError(CalendarError):
    """Exception raised when a calendar document can't be built from its input.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the underlying validation errors,
    useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the CalendarParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class RecurrenceError(CalendarError):
    """Exception raised when evaluating the occurrences of a single event.

    Recurrence rules have complex logic and it is common for there to be
    invalid dates, so this special exception exists to help provide additional
    debug data to find the source of the issue. The error is always scoped to
    one event: a batch of events keeps going when one of them raises it.
    """
