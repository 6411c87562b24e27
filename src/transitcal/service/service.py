from __future__ import annotations

import logging
from enum import IntEnum
from typing import Iterator, Mapping, Optional, Sequence

import numpy as np

from .._exceptions import ScanLimitError, ValidationError
from ..date import Date

logger = logging.getLogger(__name__)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class ExceptionType(IntEnum):
    """GTFS ``calendar_dates.txt`` exception types."""

    NONE = 0
    ADDED = 1
    REMOVED = 2


class ServiceCalendar:
    """
    Describes exactly on which days a trip is served.

    A weekly pattern (``daymap``, Monday = 0) applies between ``start_date``
    and ``end_date``; ``exceptions`` force single dates active (True) or
    inactive (False) regardless of pattern and range.  The pattern only
    applies when both bounds are set.

    Scans over date windows are evaluated in vectorized blocks and refuse to
    run over more than ``max_scan_days`` days.
    """

    DEFAULT_MAX_SCAN_DAYS: int = 366 * 100
    _SCAN_BLOCK: int = 366

    def __init__(
        self,
        service_id: str = "",
        daymap: Optional[Sequence[bool]] = None,
        start_date: Optional[Date] = None,
        end_date: Optional[Date] = None,
        exceptions: Optional[Mapping[Date, bool]] = None,
        max_scan_days: Optional[int] = None,
    ) -> None:
        if daymap is None:
            daymap = [False] * 7
        if len(daymap) != 7:
            raise ValidationError(f"Daymap must have 7 entries; got {len(daymap)}.")
        if max_scan_days is None:
            max_scan_days = self.DEFAULT_MAX_SCAN_DAYS
        if max_scan_days < 1:
            raise ValidationError(f"max_scan_days must be positive; got {max_scan_days}.")

        self.service_id: str = service_id
        self.daymap: list[bool] = [bool(x) for x in daymap]
        self.start_date: Optional[Date] = start_date
        self.end_date: Optional[Date] = end_date
        self.exceptions: dict[Date, bool] = dict(exceptions) if exceptions else {}
        self._max_scan_days: int = max_scan_days

    # ── mutation ─────────────────────────────────────────────────────────

    def set_weekday(self, weekday: int, active: bool = True) -> None:
        if not 0 <= weekday < 7:
            raise ValidationError(f"Weekday must be in 0..6; got {weekday}.")
        self.daymap[weekday] = bool(active)

    def set_exception_type_on(self, date: Date, exception_type: ExceptionType) -> None:
        if exception_type == ExceptionType.ADDED:
            self.exceptions[date] = True
        elif exception_type == ExceptionType.REMOVED:
            self.exceptions[date] = False
        else:
            raise ValidationError(
                f"Cannot set exception type {exception_type!r}; "
                "use remove_exception() to clear an exception."
            )

    def remove_exception(self, date: Date) -> None:
        self.exceptions.pop(date, None)

    # ── single-date queries ──────────────────────────────────────────────

    def exception_type_on(self, date: Date) -> ExceptionType:
        active = self.exceptions.get(date)
        if active is None:
            return ExceptionType.NONE
        return ExceptionType.ADDED if active else ExceptionType.REMOVED

    def is_active_on(self, date: Date) -> bool:
        active = self.exceptions.get(date)
        if active is not None:
            return active
        if self.start_date is None or self.end_date is None:
            return False
        return self.daymap[date.weekday] and self.start_date <= date <= self.end_date

    def is_empty(self) -> bool:
        # Range and exception values are not considered.
        return not any(self.daymap) and not self.exceptions

    # ── boundaries ───────────────────────────────────────────────────────

    def first_defined_date(self) -> Optional[Date]:
        """Earliest exception date or start date, whichever comes first."""
        candidates = list(self.exceptions)
        if self.start_date is not None:
            candidates.append(self.start_date)
        return min(candidates, default=None)

    def last_defined_date(self) -> Optional[Date]:
        """Latest exception date or end date, whichever comes last."""
        candidates = list(self.exceptions)
        if self.end_date is not None:
            candidates.append(self.end_date)
        return max(candidates, default=None)

    def first_active_date(self) -> Optional[Date]:
        first, last = self.first_defined_date(), self.last_defined_date()
        if first is None or last is None:
            return None
        stop = min(last.ordinal, first.ordinal + self._max_scan_days - 1)
        exc = self._exception_arrays()
        for lo, hi in _blocks(first.ordinal, stop, self._SCAN_BLOCK):
            hits = np.flatnonzero(self._mask(lo, hi, exc))
            if hits.size:
                return Date.from_ordinal(lo + int(hits[0]))
        self._check_window(first, last, self._max_scan_days)
        return None

    def last_active_date(self) -> Optional[Date]:
        first, last = self.first_defined_date(), self.last_defined_date()
        if first is None or last is None:
            return None
        stop = max(first.ordinal, last.ordinal - self._max_scan_days + 1)
        exc = self._exception_arrays()
        for lo, hi in _blocks(stop, last.ordinal, self._SCAN_BLOCK, reverse=True):
            hits = np.flatnonzero(self._mask(lo, hi, exc))
            if hits.size:
                return Date.from_ordinal(lo + int(hits[-1]))
        self._check_window(first, last, self._max_scan_days)
        return None

    # ── window queries ───────────────────────────────────────────────────

    def active_mask(self, start: Date, end: Date) -> np.ndarray:
        """Boolean array with one entry per day of ``[start, end]``."""
        if end < start:
            return np.zeros(0, dtype=bool)
        self._check_window(start, end, self._max_scan_days)
        return self._mask(start.ordinal, end.ordinal, self._exception_arrays())

    def active_dates(self) -> list[Date]:
        """Every active date inside the defined window, in order."""
        first, last = self.first_defined_date(), self.last_defined_date()
        if first is None or last is None:
            return []
        mask = self.active_mask(first, last)
        return [Date.from_ordinal(first.ordinal + int(i)) for i in np.flatnonzero(mask)]

    # ── equivalence ──────────────────────────────────────────────────────

    def equals(self, other: ServiceCalendar) -> bool:
        """
        True if both calendars are active on exactly the same dates.

        Outside the union of the two defined windows both calendars are
        inactive, so only that union is scanned.  Calendars whose defined
        windows do not overlap are reported unequal without a scan, even when
        neither has an active date, unless both are empty.
        """
        if self is other:
            return True
        if self.is_empty() and other.is_empty():
            return True

        first_a, last_a = self.first_defined_date(), self.last_defined_date()
        first_b, last_b = other.first_defined_date(), other.last_defined_date()

        # An undefined window means no exceptions and no usable range.
        if first_a is None or last_a is None:
            return other.first_active_date() is None
        if first_b is None or last_b is None:
            return self.first_active_date() is None

        if first_a > last_b or first_b > last_a:
            logger.debug(
                "Services %r and %r have disjoint defined windows", self.service_id, other.service_id
            )
            return False

        start = min(first_a, first_b)
        end = max(last_a, last_b)
        self._check_window(start, end, min(self._max_scan_days, other._max_scan_days))

        exc_a = self._exception_arrays()
        exc_b = other._exception_arrays()
        for lo, hi in _blocks(start.ordinal, end.ordinal, self._SCAN_BLOCK):
            diff = np.flatnonzero(self._mask(lo, hi, exc_a) != other._mask(lo, hi, exc_b))
            if diff.size:
                logger.debug(
                    "Services %r and %r differ on %s",
                    self.service_id, other.service_id, Date.from_ordinal(lo + int(diff[0])),
                )
                return False
        return True

    # ── vectorized evaluation ────────────────────────────────────────────

    def _exception_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        ordinals = np.fromiter((d.ordinal for d in self.exceptions), dtype=np.int64, count=len(self.exceptions))
        values = np.fromiter(self.exceptions.values(), dtype=bool, count=len(self.exceptions))
        return ordinals, values

    def _mask(self, lo: int, hi: int, exc: tuple[np.ndarray, np.ndarray]) -> np.ndarray:
        ordinals = np.arange(lo, hi + 1, dtype=np.int64)
        if self.start_date is not None and self.end_date is not None:
            mask = np.asarray(self.daymap, dtype=bool)[(ordinals - 1) % 7]
            mask &= (ordinals >= self.start_date.ordinal) & (ordinals <= self.end_date.ordinal)
        else:
            mask = np.zeros(ordinals.shape, dtype=bool)

        exc_ordinals, exc_values = exc
        sel = (exc_ordinals >= lo) & (exc_ordinals <= hi)
        mask[exc_ordinals[sel] - lo] = exc_values[sel]
        return mask

    def _check_window(self, start: Date, end: Date, limit: int) -> None:
        days = end.ordinal - start.ordinal + 1
        if days > limit:
            logger.warning(
                "Refusing to scan %d days (%s..%s) for service %r; limit is %d",
                days, start, end, self.service_id, limit,
            )
            raise ScanLimitError(
                f"Window {start}..{end} spans {days} days; limit is {limit}."
            )

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def max_scan_days(self) -> int:
        return self._max_scan_days

    def __repr__(self) -> str:
        days = "".join(w[0] if on else "-" for w, on in zip(_WEEKDAYS, self.daymap))
        return (
            f"ServiceCalendar(service_id={self.service_id!r}, "
            f"daymap={days!r}, "
            f"start_date={self.start_date}, "
            f"end_date={self.end_date}, "
            f"exceptions={len(self.exceptions)})"
        )


def _blocks(lo: int, hi: int, size: int, reverse: bool = False) -> Iterator[tuple[int, int]]:
    """Split ``[lo, hi]`` into inclusive ranges of at most ``size`` days."""
    starts = range(lo, hi + 1, size)
    if reverse:
        starts = reversed(starts)
    for s in starts:
        yield s, min(s + size - 1, hi)
