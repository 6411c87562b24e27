from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Iterator

from .._exceptions import ValidationError

# Every date-to-instant conversion anchors at noon UTC, so that no timezone or
# DST transition can move an instant onto a neighbouring day.
NOON_UTC = _dt.time(12, 0, tzinfo=_dt.timezone.utc)


@dataclass(frozen=True, order=True)
class Date:
    """
    A service day as used in GTFS feeds.

    Fields are validated at construction (proleptic Gregorian calendar, years
    1..9999); nothing is normalized.  Dates order chronologically, hash by
    value and can be used as mapping keys.
    """

    year: int
    month: int
    day: int
    _ordinal: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            ordinal = _dt.date(self.year, self.month, self.day).toordinal()
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Invalid date year={self.year!r} month={self.month!r} "
                f"day={self.day!r}: {exc}"
            ) from exc
        object.__setattr__(self, "_ordinal", ordinal)

    # ── construction ─────────────────────────────────────────────────────

    @classmethod
    def from_civil(cls, year: int, month: int, day: int) -> Date:
        return cls(year, month, day)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> Date:
        try:
            d = _dt.date.fromordinal(ordinal)
        except (OverflowError, ValueError) as exc:
            raise ValidationError(f"Day number {ordinal} is out of range.") from exc
        return cls(d.year, d.month, d.day)

    @classmethod
    def from_datetime(cls, value: _dt.date) -> Date:
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, text: str) -> Date:
        """Parse the GTFS ``YYYYMMDD`` form."""
        s = text.strip()
        if len(s) != 8 or not (s.isascii() and s.isdigit()):
            raise ValidationError(f"Expected a YYYYMMDD date; got {text!r}.")
        return cls(int(s[:4]), int(s[4:6]), int(s[6:]))

    # ── arithmetic ───────────────────────────────────────────────────────

    @property
    def ordinal(self) -> int:
        """Proleptic Gregorian day number, 0001-01-01 being day 1."""
        return self._ordinal

    @property
    def weekday(self) -> int:
        """Day of the week, Monday = 0 ... Sunday = 6."""
        # 0001-01-01 is a Monday
        return (self._ordinal - 1) % 7

    def offset(self, days: int) -> Date:
        if days == 0:
            return self
        return Date.from_ordinal(self._ordinal + days)

    @staticmethod
    def compare(a: Date, b: Date) -> int:
        """-1 if ``a`` is before ``b``, 0 if equal, 1 if after."""
        return (a._ordinal > b._ordinal) - (a._ordinal < b._ordinal)

    @staticmethod
    def range(start: Date, end: Date) -> Iterator[Date]:
        """Every date from ``start`` to ``end``, both inclusive."""
        for n in range(start._ordinal, end._ordinal + 1):
            yield Date.from_ordinal(n)

    # ── conversion ───────────────────────────────────────────────────────

    def to_date(self) -> _dt.date:
        return _dt.date(self.year, self.month, self.day)

    def noon_utc(self) -> _dt.datetime:
        return _dt.datetime.combine(self.to_date(), NOON_UTC)

    def __str__(self) -> str:
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"
