class CalendarError(Exception):
    """Base class for all errors raised by transitcal."""


class ValidationError(CalendarError, ValueError):
    """A date field, weekday index or exception type is out of range."""


class ScanLimitError(CalendarError):
    """A day-by-day scan would cover more days than the calendar allows."""
