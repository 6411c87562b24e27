"""
transitcal
~~~~~~~~~~

Service calendars for scheduled transit: day-granularity dates, weekly
service patterns with date exceptions, and equivalence of calendars by the
dates they are active on.

Public API
----------
Date             Immutable calendar day (transitcal.date).
ServiceCalendar  Weekly pattern + range + exceptions (transitcal.service).
ExceptionType    Exception codes of calendar_dates.txt.
CalendarError    Base exception for all transitcal errors.
ValidationError  Out-of-range date fields, weekdays or exception types.
ScanLimitError   A date window is too wide to scan.
"""

from __future__ import annotations

from transitcal._exceptions import CalendarError, ScanLimitError, ValidationError
from transitcal.date import NOON_UTC, Date
from transitcal.service import ExceptionType, ServiceCalendar

__all__ = [
    "CalendarError",
    "Date",
    "ExceptionType",
    "NOON_UTC",
    "ScanLimitError",
    "ServiceCalendar",
    "ValidationError",
]
