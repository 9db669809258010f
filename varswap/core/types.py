"""Core types: UtcDatetime, Currency, Period, PeriodFrequency.

Period stepping uses dateutil's relativedelta so that month and year
periods respect calendar month lengths.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import ClassVar, Literal, final

from dateutil.relativedelta import relativedelta

from varswap.core.result import Err, Ok


def is_aware(dt: datetime) -> bool:
    """True when dt carries a usable UTC offset."""
    return dt.tzinfo is not None and dt.tzinfo.utcoffset(dt) is not None


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if not is_aware(self.value):
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def parse(raw: datetime) -> Ok[UtcDatetime] | Err[str]:
        if not is_aware(raw):
            return Err("UtcDatetime requires timezone-aware datetime, got naive")
        return Ok(UtcDatetime(value=raw.astimezone(UTC)))

    @staticmethod
    def now() -> UtcDatetime:
        return UtcDatetime(value=datetime.now(tz=UTC))


@final
@dataclass(frozen=True, slots=True)
class Currency:
    """ISO 4217 style currency code, e.g. USD. Opaque beyond its format."""

    code: str

    def __post_init__(self) -> None:
        if not (len(self.code) == 3 and self.code.isalpha() and self.code.isupper()):
            raise TypeError(f"Currency requires a 3-letter upper-case code, got {self.code!r}")

    @staticmethod
    def parse(raw: str) -> Ok[Currency] | Err[str]:
        code = raw.strip().upper()
        if not (len(code) == 3 and code.isalpha()):
            return Err(f"Currency requires a 3-letter code, got {raw!r}")
        return Ok(Currency(code=code))

    def __str__(self) -> str:
        return self.code


# ---------------------------------------------------------------------------
# Periods and observation frequencies
# ---------------------------------------------------------------------------

type PeriodUnit = Literal["D", "W", "M", "Y"]


@final
@dataclass(frozen=True, slots=True)
class Period:
    """A time period: multiplier x unit (e.g. 1D, 3M, 1Y)."""

    multiplier: int
    unit: PeriodUnit

    def __post_init__(self) -> None:
        if self.multiplier <= 0:
            raise TypeError(f"Period.multiplier must be > 0, got {self.multiplier}")
        if self.unit not in ("D", "W", "M", "Y"):
            raise TypeError(f"Period.unit must be one of D, W, M, Y, got {self.unit!r}")

    def __str__(self) -> str:
        return f"{self.multiplier}{self.unit}"


def add_period(d: date, period: Period, times: int = 1) -> date:
    """Step d forward by `times` whole periods.

    Month and year steps are taken from d itself (d + n*period), so an
    end-of-month start does not drift as it would with repeated addition.
    """
    n = period.multiplier * times
    match period.unit:
        case "D":
            return d + relativedelta(days=n)
        case "W":
            return d + relativedelta(weeks=n)
        case "M":
            return d + relativedelta(months=n)
        case "Y":
            return d + relativedelta(years=n)


@final
@dataclass(frozen=True, slots=True)
class PeriodFrequency:
    """A named observation frequency backed by a Period."""

    name: str
    period: Period

    DAILY: ClassVar[PeriodFrequency]
    WEEKLY: ClassVar[PeriodFrequency]
    MONTHLY: ClassVar[PeriodFrequency]
    QUARTERLY: ClassVar[PeriodFrequency]
    SEMI_ANNUAL: ClassVar[PeriodFrequency]
    ANNUAL: ClassVar[PeriodFrequency]

    def __str__(self) -> str:
        return f"{self.name} ({self.period})"


PeriodFrequency.DAILY = PeriodFrequency(name="Daily", period=Period(1, "D"))
PeriodFrequency.WEEKLY = PeriodFrequency(name="Weekly", period=Period(1, "W"))
PeriodFrequency.MONTHLY = PeriodFrequency(name="Monthly", period=Period(1, "M"))
PeriodFrequency.QUARTERLY = PeriodFrequency(name="Quarterly", period=Period(3, "M"))
PeriodFrequency.SEMI_ANNUAL = PeriodFrequency(name="Semi-annual", period=Period(6, "M"))
PeriodFrequency.ANNUAL = PeriodFrequency(name="Annual", period=Period(1, "Y"))
