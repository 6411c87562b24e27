"""
transitcal.service
~~~~~~~~~~~~~~~~~~

GTFS service calendars: a weekly pattern bounded by a start and end date,
with per-date exceptions that force a day active or inactive.

Basic usage::

    from transitcal.date import Date
    from transitcal.service import ExceptionType, ServiceCalendar

    weekdays = ServiceCalendar(
        "WK",
        daymap=[True, True, True, True, True, False, False],   # Mon–Fri
        start_date=Date(2024, 1, 1),
        end_date=Date(2024, 1, 31),
    )
    weekdays.set_exception_type_on(Date(2024, 1, 8), ExceptionType.REMOVED)
    weekdays.is_active_on(Date(2024, 1, 8))     # → False
    weekdays.first_active_date()                # → Date(year=2024, month=1, day=1)

Two calendars are compared by the dates they are active on, not by how they
are written down::

    other.equals(weekdays)

Public API
----------
ServiceCalendar  Weekly pattern + range + exception table.
ExceptionType    NONE / ADDED / REMOVED, as in calendar_dates.txt.
"""

from __future__ import annotations

from transitcal.service.service import ExceptionType, ServiceCalendar

__all__ = [
    "ExceptionType",
    "ServiceCalendar",
]
