"""
transitcal.date
~~~~~~~~~~~~~~~

Day-granularity date values for service calendars.

Basic usage::

    from transitcal.date import Date

    d = Date(2024, 2, 28)
    d.offset(2)          # → Date(year=2024, month=3, day=1)
    d.weekday            # → 2 (Wednesday)
    Date.parse("20240301") > d   # → True

Public API
----------
Date       Immutable, hashable calendar day.
NOON_UTC   Time of day used whenever a Date becomes an instant.
"""

from __future__ import annotations

from transitcal.date.date import NOON_UTC, Date

__all__ = [
    "Date",
    "NOON_UTC",
]
