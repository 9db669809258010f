"""Variance swap contract terms.

A variance swap is a forward contract on the realized variance of an
underlying. The floating leg is the realized variance observed over the
observation window; the fixed leg is the variance strike.

Terms are captured in either of two parameterisations:
  vega:     vol_strike, vol_notional
  variance: var_strike = vol_strike**2,
            var_notional = 0.5 * vol_notional / vol_strike
The vega pair is stored; the variance pair is derived once at
construction. var_notional approximates the payoff for realized
volatility one point above the strike.

Construction goes through the smart constructors, which return
Ok | Err. __post_init__ re-checks the invariants that must hold for any
instance and raises TypeError when they are bypassed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, final

from varswap.core.calendar import Calendar
from varswap.core.errors import (
    INVALID_INPUT,
    INVALID_MAGNITUDE,
    INVALID_SCHEDULE,
    MISSING_INPUT,
    UNSUPPORTED_CONFIGURATION,
    FieldViolation,
    UnsupportedConfigurationError,
    ValidationError,
    VarSwapError,
)
from varswap.core.result import Err, Ok
from varswap.core.types import Currency, PeriodFrequency, UtcDatetime, add_period, is_aware

if TYPE_CHECKING:
    from varswap.core.calendar import TimeCalculator
    from varswap.core.timeseries import ObservationSeries
    from varswap.pricing.types import VarianceSwap

_SOURCE = "varswap.instrument.variance_swap"

# Only daily sampling is implemented; longer periods need a weighting scheme.
SUPPORTED_FREQUENCIES: tuple[PeriodFrequency, ...] = (PeriodFrequency.DAILY,)


def _is_real(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def count_expected_good_days(
    start: date, end: date, calendar: Calendar, freq: PeriodFrequency,
) -> int:
    """Count calendar working days on the schedule start, start+p, ... <= end.

    Pure function of its arguments. Returns 0 when end < start.
    """
    n_good = 0
    step = 0
    current = start
    while current <= end:
        if calendar.is_working_day(current):
            n_good += 1
        step += 1
        try:
            current = add_period(start, freq.period, step)
        except (OverflowError, ValueError):
            # next schedule date lies beyond date.max
            break
    return n_good


@final
@dataclass(frozen=True, slots=True)
class VarianceSwapDefinition:
    """Static terms of a variance swap.

    Equality and hashing cover the stored terms only; var_strike,
    var_notional and n_obs_expected are functions of them.
    """

    obs_start_date: datetime
    obs_end_date: datetime
    settlement_date: datetime
    obs_freq: PeriodFrequency
    currency: Currency
    calendar: Calendar
    annualization_factor: float
    vol_strike: float
    vol_notional: float
    var_strike: float = field(init=False, compare=False)
    var_notional: float = field(init=False, compare=False)
    n_obs_expected: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("obs_start_date", "obs_end_date", "settlement_date"):
            if not is_aware(getattr(self, name)):
                raise TypeError(f"VarianceSwapDefinition.{name} must be timezone-aware")
        if self.obs_freq not in SUPPORTED_FREQUENCIES:
            raise TypeError(
                "Only DAILY observation frequencies are currently supported, "
                f"got {self.obs_freq}"
            )
        if self.vol_strike == 0:
            raise TypeError("VarianceSwapDefinition.vol_strike must be non-zero")
        object.__setattr__(self, "var_strike", self.vol_strike * self.vol_strike)
        object.__setattr__(self, "var_notional", 0.5 * self.vol_notional / self.vol_strike)
        object.__setattr__(self, "n_obs_expected", count_expected_good_days(
            self.obs_start_date.date(), self.obs_end_date.date(),
            self.calendar, self.obs_freq,
        ))

    # -- Smart constructors ------------------------------------------------

    @staticmethod
    def from_vega_params(
        obs_start_date: datetime | None,
        obs_end_date: datetime | None,
        settlement_date: datetime | None,
        obs_freq: PeriodFrequency | None,
        currency: Currency | str | None,
        calendar: Calendar | None,
        annualization_factor: float,
        vol_strike: float,
        vol_notional: float,
    ) -> Ok[VarianceSwapDefinition] | Err[VarSwapError]:
        """Create from the volatility strike and vega notional.

        The trade pays (realized variance - vol_strike**2) multiplied by
        0.5 * vol_notional / vol_strike.
        """
        source = f"{_SOURCE}.from_vega_params"
        required = {
            "obs_start_date": obs_start_date,
            "obs_end_date": obs_end_date,
            "settlement_date": settlement_date,
            "obs_freq": obs_freq,
            "currency": currency,
            "calendar": calendar,
        }
        missing = tuple(
            FieldViolation(path=name, constraint="must not be None", actual_value="None")
            for name, value in required.items() if value is None
        )
        if missing:
            return Err(ValidationError.of(MISSING_INPUT, source, missing))

        if obs_freq not in SUPPORTED_FREQUENCIES:
            return Err(UnsupportedConfigurationError(
                message=(
                    "Only DAILY observation frequencies are currently supported. "
                    f"obs_freq = {obs_freq}"
                ),
                code=UNSUPPORTED_CONFIGURATION, timestamp=UtcDatetime.now(),
                source=source, parameter="obs_freq", value=str(obs_freq),
            ))

        invalid: list[FieldViolation] = []
        for name, value in (
            ("obs_start_date", obs_start_date),
            ("obs_end_date", obs_end_date),
            ("settlement_date", settlement_date),
        ):
            if not isinstance(value, datetime) or not is_aware(value):
                invalid.append(FieldViolation(
                    path=name, constraint="must be a timezone-aware datetime",
                    actual_value=repr(value),
                ))
        if not isinstance(calendar, Calendar):
            invalid.append(FieldViolation(
                path="calendar", constraint="must provide is_working_day(date)",
                actual_value=type(calendar).__name__,
            ))
        if isinstance(currency, Currency):
            ccy = currency
        else:
            match Currency.parse(str(currency)):
                case Err(e):
                    invalid.append(FieldViolation(
                        path="currency", constraint=e, actual_value=repr(currency),
                    ))
                case Ok(ccy):
                    pass
        if invalid:
            return Err(ValidationError.of(INVALID_INPUT, source, tuple(invalid)))

        if not obs_start_date <= obs_end_date <= settlement_date:
            return Err(ValidationError.of(
                INVALID_SCHEDULE, source,
                (FieldViolation(
                    path="obs_end_date",
                    constraint="must satisfy obs_start_date <= obs_end_date <= settlement_date",
                    actual_value=(
                        f"{obs_start_date.isoformat()} / {obs_end_date.isoformat()} / "
                        f"{settlement_date.isoformat()}"
                    ),
                ),),
            ))

        magnitude: list[FieldViolation] = []
        for name, value in (
            ("annualization_factor", annualization_factor),
            ("vol_strike", vol_strike),
            ("vol_notional", vol_notional),
        ):
            if not _is_real(value):
                magnitude.append(FieldViolation(
                    path=name, constraint="must be a real number", actual_value=repr(value),
                ))
            elif not math.isfinite(value):
                magnitude.append(FieldViolation(
                    path=name, constraint="must be finite", actual_value=repr(value),
                ))
        if _is_real(vol_strike) and vol_strike == 0:
            # var_notional = 0.5 * vol_notional / vol_strike is undefined
            magnitude.append(FieldViolation(
                path="vol_strike", constraint="must be non-zero", actual_value=repr(vol_strike),
            ))
        if magnitude:
            return Err(ValidationError.of(INVALID_MAGNITUDE, source, tuple(magnitude)))

        return Ok(VarianceSwapDefinition(
            obs_start_date=obs_start_date, obs_end_date=obs_end_date,
            settlement_date=settlement_date, obs_freq=obs_freq,
            currency=ccy, calendar=calendar,
            annualization_factor=float(annualization_factor),
            vol_strike=float(vol_strike), vol_notional=float(vol_notional),
        ))

    @staticmethod
    def from_variance_params(
        obs_start_date: datetime | None,
        obs_end_date: datetime | None,
        settlement_date: datetime | None,
        obs_freq: PeriodFrequency | None,
        currency: Currency | str | None,
        calendar: Calendar | None,
        annualization_factor: float,
        var_strike: float,
        var_notional: float,
    ) -> Ok[VarianceSwapDefinition] | Err[VarSwapError]:
        """Create from the variance strike and variance notional."""
        violations: list[FieldViolation] = []
        for name, value in (("var_strike", var_strike), ("var_notional", var_notional)):
            if not _is_real(value):
                violations.append(FieldViolation(
                    path=name, constraint="must be a real number", actual_value=repr(value),
                ))
        if _is_real(var_strike) and not var_strike >= 0:
            violations.append(FieldViolation(
                path="var_strike", constraint="must not be negative",
                actual_value=repr(var_strike),
            ))
        if violations:
            return Err(ValidationError.of(
                INVALID_MAGNITUDE, f"{_SOURCE}.from_variance_params", tuple(violations),
            ))
        vol_strike = math.sqrt(var_strike)
        vol_notional = 2 * var_notional * vol_strike
        return VarianceSwapDefinition.from_vega_params(
            obs_start_date, obs_end_date, settlement_date, obs_freq,
            currency, calendar, annualization_factor, vol_strike, vol_notional,
        )

    # -- Resolution --------------------------------------------------------

    def to_derivative(
        self,
        valuation_date: datetime | None,
        observations: ObservationSeries | None,
        time_calculator: TimeCalculator | None = None,
    ) -> Ok[VarianceSwap] | Err[VarSwapError]:
        """Resolve these terms as of valuation_date. See resolve_variance_swap."""
        from varswap.instrument.resolver import resolve_variance_swap  # avoid circular

        if time_calculator is None:
            return resolve_variance_swap(self, valuation_date, observations)
        return resolve_variance_swap(
            self, valuation_date, observations, time_calculator=time_calculator,
        )
