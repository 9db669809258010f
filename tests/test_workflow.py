"""Tests for varswap.workflow -- activity I/O, the activity and the data converter."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from temporalio.testing import ActivityEnvironment

from varswap.core.calendar import DayCountConvention
from varswap.core.errors import DATA_INCONSISTENCY
from varswap.core.result import unwrap
from varswap.core.timeseries import ObservationSeries
from varswap.instrument.variance_swap import VarianceSwapDefinition
from varswap.infra.config import ResolutionConfig, TemporalWorkerConfig
from varswap.workflow.activities import ResolutionActivities
from varswap.workflow.converter import VARSWAP_DATA_CONVERTER, _from_json
from varswap.workflow.types import ResolveInput, ResolveOutput
from varswap.workflow.worker import build_activities

_MONDAY = datetime(2012, 1, 9, tzinfo=UTC)


def _round_trip[T](value: T, cls: type[T]) -> T:
    converter = VARSWAP_DATA_CONVERTER.payload_converter
    payloads = converter.to_payloads([value])
    return converter.from_payloads(payloads, [cls])[0]


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class TestResolveOutput:
    def test_requires_result_or_error(self) -> None:
        with pytest.raises(TypeError):
            ResolveOutput()

    def test_rejects_both(
        self, january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
    ) -> None:
        swap = unwrap(january_2012.to_derivative(_MONDAY, january_fixings))
        with pytest.raises(TypeError):
            ResolveOutput(result=swap, error="boom")

    def test_error_only(self) -> None:
        out = ResolveOutput(error="boom", error_code=DATA_INCONSISTENCY)
        assert out.result is None

    def test_input_defaults(self, january_2012: VarianceSwapDefinition) -> None:
        inp = ResolveInput(definition=january_2012, valuation_date=_MONDAY)
        assert inp.observations is ObservationSeries.EMPTY
        assert inp.day_count is None


# ---------------------------------------------------------------------------
# Activity
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_activity_resolves(
    january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
) -> None:
    env = ActivityEnvironment()
    out = await env.run(
        ResolutionActivities().resolve_variance_swap,
        ResolveInput(definition=january_2012, valuation_date=_MONDAY, observations=january_fixings),
    )
    assert out.error is None
    assert out.result is not None
    assert out.result.n_obs_actual == 5
    assert out.result.n_obs_disrupted == 1


@pytest.mark.asyncio
async def test_activity_uses_day_count(
    january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
) -> None:
    env = ActivityEnvironment()
    out = await env.run(
        ResolutionActivities().resolve_variance_swap,
        ResolveInput(
            definition=january_2012, valuation_date=_MONDAY,
            observations=january_fixings, day_count=DayCountConvention.ACT_360,
        ),
    )
    assert out.result is not None
    assert out.result.time_to_obs_end == pytest.approx(22 / 360)


@pytest.mark.asyncio
async def test_activity_defaults_to_act_act_isda(
    january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
) -> None:
    env = ActivityEnvironment()
    out = await env.run(
        ResolutionActivities().resolve_variance_swap,
        ResolveInput(definition=january_2012, valuation_date=_MONDAY, observations=january_fixings),
    )
    assert out.result is not None
    assert out.result.time_to_obs_end == pytest.approx(22 / 366)


@pytest.mark.asyncio
async def test_worker_resolution_config_applies(
    january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
) -> None:
    config = TemporalWorkerConfig(resolution=ResolutionConfig(day_count=DayCountConvention.ACT_360))
    (resolve,) = build_activities(config)
    env = ActivityEnvironment()
    out = await env.run(
        resolve,
        ResolveInput(definition=january_2012, valuation_date=_MONDAY, observations=january_fixings),
    )
    assert out.result is not None
    assert out.result.time_to_obs_end == pytest.approx(22 / 360)


@pytest.mark.asyncio
async def test_input_day_count_overrides_worker_config(
    january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
) -> None:
    config = TemporalWorkerConfig(resolution=ResolutionConfig(day_count=DayCountConvention.ACT_360))
    (resolve,) = build_activities(config)
    env = ActivityEnvironment()
    out = await env.run(
        resolve,
        ResolveInput(
            definition=january_2012, valuation_date=_MONDAY,
            observations=january_fixings, day_count=DayCountConvention.ACT_365,
        ),
    )
    assert out.result is not None
    assert out.result.time_to_obs_end == pytest.approx(22 / 365)


@pytest.mark.asyncio
async def test_activity_reports_inconsistent_fixings(
    january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
) -> None:
    series = unwrap(ObservationSeries.create(
        {**dict(january_fixings.items()), date(2012, 1, 7): 0.1, date(2012, 1, 8): 0.1},
    ))
    env = ActivityEnvironment()
    out = await env.run(
        ResolutionActivities().resolve_variance_swap,
        ResolveInput(definition=january_2012, valuation_date=_MONDAY, observations=series),
    )
    assert out.result is None
    assert out.error_code == DATA_INCONSISTENCY
    assert out.error is not None
    assert "7" in out.error


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------


class TestConverter:
    def test_definition_round_trip(self, january_2012: VarianceSwapDefinition) -> None:
        decoded = _round_trip(january_2012, VarianceSwapDefinition)
        assert decoded == january_2012
        assert decoded.n_obs_expected == january_2012.n_obs_expected
        assert decoded.var_notional == january_2012.var_notional

    def test_holiday_calendar_round_trip(self, january_2012: VarianceSwapDefinition) -> None:
        definition = unwrap(VarianceSwapDefinition.from_vega_params(
            january_2012.obs_start_date, january_2012.obs_end_date,
            january_2012.settlement_date, january_2012.obs_freq, "USD",
            january_2012.calendar.with_holidays(date(2012, 1, 16)), 252.0, 0.2, 1000.0,
        ))
        decoded = _round_trip(definition, VarianceSwapDefinition)
        assert decoded.calendar.holidays == frozenset({date(2012, 1, 16)})
        assert decoded.n_obs_expected == 21

    def test_input_round_trip(
        self, january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
    ) -> None:
        inp = ResolveInput(
            definition=january_2012, valuation_date=_MONDAY,
            observations=january_fixings, day_count=DayCountConvention.ACT_365,
        )
        decoded = _round_trip(inp, ResolveInput)
        assert decoded == inp
        assert decoded.day_count is DayCountConvention.ACT_365

    def test_input_without_day_count_round_trip(
        self, january_2012: VarianceSwapDefinition,
    ) -> None:
        inp = ResolveInput(definition=january_2012, valuation_date=_MONDAY)
        decoded = _round_trip(inp, ResolveInput)
        assert decoded == inp
        assert decoded.day_count is None

    def test_output_round_trip(
        self, january_2012: VarianceSwapDefinition, january_fixings: ObservationSeries,
    ) -> None:
        out = ResolveOutput(result=unwrap(january_2012.to_derivative(_MONDAY, january_fixings)))
        decoded = _round_trip(out, ResolveOutput)
        assert decoded == out
        assert isinstance(decoded.result.observations, tuple)

    def test_refuses_unknown_type(self) -> None:
        with pytest.raises(TypeError, match="Refusing"):
            _from_json(object, {"__type__": "os.path.PurePath"})
