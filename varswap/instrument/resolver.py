"""Resolve variance swap terms into a VarianceSwap as of a valuation date.

The resolver binds the static schedule to a valuation date and a series
of underlying fixings:

  - signed year fractions to observation start, observation end and
    settlement;
  - the realized fixings in [obs_start_date, valuation_date);
  - the number of disrupted observations, i.e. good business days up to
    and including the valuation date for which no fixing was supplied.

A disruption is a scheduled observation that did not happen, for
example an exchange closure on a day the calendar expected trading.

Resolution is a pure function of (definition, valuation date, series).
Calls for different valuation dates are independent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from varswap.core.calendar import DEFAULT_TIME_CALCULATOR, TimeCalculator
from varswap.core.errors import (
    DATA_INCONSISTENCY,
    INVALID_INPUT,
    MISSING_INPUT,
    DataInconsistencyError,
    FieldViolation,
    ValidationError,
    VarSwapError,
)
from varswap.core.result import Err, Ok, sequence
from varswap.core.timeseries import ObservationSeries
from varswap.core.types import UtcDatetime, is_aware
from varswap.instrument.variance_swap import VarianceSwapDefinition, count_expected_good_days
from varswap.pricing.types import VarianceSwap

logger = logging.getLogger(__name__)

_SOURCE = "varswap.instrument.resolver"


def resolve_variance_swap(
    definition: VarianceSwapDefinition,
    valuation_date: datetime | None,
    observations: ObservationSeries | None,
    *,
    time_calculator: TimeCalculator = DEFAULT_TIME_CALCULATOR,
) -> Ok[VarianceSwap] | Err[VarSwapError]:
    """Resolve definition as of valuation_date.

    observations must be supplied even before the window opens; pass
    ObservationSeries.EMPTY in that case.

    Returns Err(DataInconsistencyError) when the series holds more
    fixings before valuation_date than the calendar has good days.
    """
    source = f"{_SOURCE}.resolve_variance_swap"
    missing: list[FieldViolation] = []
    if valuation_date is None:
        missing.append(FieldViolation(
            path="valuation_date", constraint="must not be None", actual_value="None",
        ))
    if observations is None:
        missing.append(FieldViolation(
            path="observations",
            constraint=(
                "must not be None; if observations have not begun, "
                "pass ObservationSeries.EMPTY"
            ),
            actual_value="None",
        ))
    if missing:
        return Err(ValidationError.of(MISSING_INPUT, source, tuple(missing)))
    if not isinstance(valuation_date, datetime) or not is_aware(valuation_date):
        return Err(ValidationError.of(
            INVALID_INPUT, source,
            (FieldViolation(
                path="valuation_date", constraint="must be a timezone-aware datetime",
                actual_value=repr(valuation_date),
            ),),
        ))

    time_to_obs_start = time_calculator.years_between(valuation_date, definition.obs_start_date)
    time_to_obs_end = time_calculator.years_between(valuation_date, definition.obs_end_date)
    time_to_settlement = time_calculator.years_between(valuation_date, definition.settlement_date)

    if time_to_obs_start > 0:
        realized = ObservationSeries.EMPTY
    else:
        realized = observations.sub_series(
            definition.obs_start_date.date(), True, valuation_date.date(), False,
        )
    values = realized.values()

    n_good_business_days = count_expected_good_days(
        definition.obs_start_date.date(), valuation_date.date(),
        definition.calendar, definition.obs_freq,
    )
    n_obs_disrupted = n_good_business_days - len(values)
    if n_obs_disrupted < 0:
        return Err(DataInconsistencyError(
            message=(
                f"Have more observations {len(values)} than good business days "
                f"{n_good_business_days}"
            ),
            code=DATA_INCONSISTENCY, timestamp=UtcDatetime.now(), source=source,
            expected=n_good_business_days, actual=len(values),
        ))

    logger.debug(
        "Resolved variance swap as of %s: %d realized, %d disrupted, %d expected",
        valuation_date.isoformat(), len(values), n_obs_disrupted,
        definition.n_obs_expected,
    )
    return Ok(VarianceSwap(
        time_to_obs_start=time_to_obs_start,
        time_to_obs_end=time_to_obs_end,
        time_to_settlement=time_to_settlement,
        var_strike=definition.var_strike,
        var_notional=definition.var_notional,
        currency=definition.currency,
        annualization_factor=definition.annualization_factor,
        n_obs_expected=definition.n_obs_expected,
        n_obs_disrupted=n_obs_disrupted,
        observations=values,
        observation_weights=(),
    ))


def resolve_many(
    definition: VarianceSwapDefinition,
    valuation_dates: Iterable[datetime],
    observations: ObservationSeries,
    *,
    time_calculator: TimeCalculator = DEFAULT_TIME_CALCULATOR,
) -> Ok[tuple[VarianceSwap, ...]] | Err[VarSwapError]:
    """Resolve one definition for several valuation dates, in input order.

    Stops at the first valuation date that fails.
    """
    return sequence(
        resolve_variance_swap(
            definition, valuation_date, observations, time_calculator=time_calculator,
        )
        for valuation_date in valuation_dates
    )
