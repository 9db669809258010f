"""Hypothesis profiles and shared pytest fixtures for varswap."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest
from hypothesis import HealthCheck, settings

from varswap.core.calendar import WEEKDAYS
from varswap.core.result import unwrap
from varswap.core.timeseries import ObservationSeries
from varswap.core.types import PeriodFrequency
from varswap.instrument.variance_swap import VarianceSwapDefinition

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("dev")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def january_2012() -> VarianceSwapDefinition:
    """Daily observations over January 2012 on a weekday calendar."""
    return unwrap(VarianceSwapDefinition.from_vega_params(
        obs_start_date=datetime(2012, 1, 2, tzinfo=UTC),
        obs_end_date=datetime(2012, 1, 31, tzinfo=UTC),
        settlement_date=datetime(2012, 2, 3, tzinfo=UTC),
        obs_freq=PeriodFrequency.DAILY,
        currency="USD",
        calendar=WEEKDAYS,
        annualization_factor=252.0,
        vol_strike=0.2,
        vol_notional=1000.0,
    ))


@pytest.fixture
def january_fixings() -> ObservationSeries:
    """One fixing for every weekday of January 2012 (22 points)."""
    items = []
    d = date(2012, 1, 2)
    while d <= date(2012, 1, 31):
        if d.weekday() < 5:
            items.append((d, 0.0001 * d.day))
        d += timedelta(days=1)
    return unwrap(ObservationSeries.create(items))
