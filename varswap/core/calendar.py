"""Business day calendars and year-fraction time calculation.

Calendar answers "is this a working day". TimeCalculator turns two
instants into a signed year fraction under a day count convention.
Both are Protocols; the concrete classes here are frozen dataclasses so
they take part in the equality of the contracts that hold them.
"""

from __future__ import annotations

import calendar as _cal
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Protocol, assert_never, final, runtime_checkable

# ---------------------------------------------------------------------------
# Calendars
# ---------------------------------------------------------------------------


@runtime_checkable
class Calendar(Protocol):
    """Anything that can tell working days from holidays."""

    def is_working_day(self, d: date) -> bool: ...


@final
@dataclass(frozen=True, slots=True)
class HolidayCalendar:
    """Weekend days plus an explicit holiday set.

    weekend holds date.weekday() numbers (Mon=0 .. Sun=6).
    """

    name: str
    holidays: frozenset[date] = frozenset()
    weekend: frozenset[int] = field(default=frozenset({5, 6}))

    def __post_init__(self) -> None:
        if not self.name:
            raise TypeError("HolidayCalendar requires a non-empty name")
        bad = [w for w in self.weekend if not 0 <= w <= 6]
        if bad:
            raise TypeError(f"HolidayCalendar.weekend entries must be 0..6, got {bad}")

    def is_working_day(self, d: date) -> bool:
        return d.weekday() not in self.weekend and d not in self.holidays

    def with_holidays(self, *days: date) -> HolidayCalendar:
        """Copy with additional holidays."""
        return HolidayCalendar(
            name=self.name, holidays=self.holidays | frozenset(days), weekend=self.weekend,
        )


WEEKDAYS = HolidayCalendar(name="WEEKDAYS")


# ---------------------------------------------------------------------------
# Day count conventions
# ---------------------------------------------------------------------------


class DayCountConvention(Enum):
    """Conventions available for time-to-date offsets."""

    ACT_360 = "ACT/360"
    ACT_365 = "ACT/365"
    ACT_ACT_ISDA = "ACT/ACT.ISDA"
    ACT_365L = "ACT/365L"


def _days_in_year(y: int) -> int:
    return 366 if _cal.isleap(y) else 365


def _act_act_isda(start: date, end: date) -> float:
    """Actual days over actual days in year, split at year boundaries."""
    total = 0.0
    current = start
    while current.year < end.year:
        year_end = date(current.year + 1, 1, 1)
        total += (year_end - current).days / _days_in_year(current.year)
        current = year_end
    return total + (end - current).days / _days_in_year(current.year)


def _act_365l(start: date, end: date) -> float:
    # 366 if the period contains a 29 February
    divisor = 365
    for y in range(start.year, end.year + 1):
        if _cal.isleap(y) and start < date(y, 2, 29) <= end:
            divisor = 366
            break
    return (end - start).days / divisor


def year_fraction(start: date, end: date, convention: DayCountConvention) -> float:
    """Year fraction of [start, end). Requires start <= end."""
    if start > end:
        raise ValueError(f"year_fraction: start ({start}) must be <= end ({end})")
    match convention:
        case DayCountConvention.ACT_360:
            return (end - start).days / 360
        case DayCountConvention.ACT_365:
            return (end - start).days / 365
        case DayCountConvention.ACT_ACT_ISDA:
            return _act_act_isda(start, end)
        case DayCountConvention.ACT_365L:
            return _act_365l(start, end)
        case _never:
            assert_never(_never)


# ---------------------------------------------------------------------------
# Time calculators
# ---------------------------------------------------------------------------


class TimeCalculator(Protocol):
    """Signed year fraction between two instants."""

    def years_between(self, start: datetime, end: datetime) -> float: ...


@final
@dataclass(frozen=True, slots=True)
class DayCountTimeCalculator:
    """TimeCalculator driven by a DayCountConvention.

    end is rebased into start's time zone before dates are taken, so the
    offset reflects the calendar days seen by the party at start. The
    result is negative when end precedes start.
    """

    convention: DayCountConvention = DayCountConvention.ACT_ACT_ISDA

    def years_between(self, start: datetime, end: datetime) -> float:
        rebased = end.astimezone(start.tzinfo)
        if start > rebased:
            return -year_fraction(rebased.date(), start.date(), self.convention)
        return year_fraction(start.date(), rebased.date(), self.convention)


DEFAULT_TIME_CALCULATOR = DayCountTimeCalculator()
