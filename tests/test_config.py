"""Tests for varswap.infra.config."""

from __future__ import annotations

import pytest

from varswap.core.calendar import DayCountConvention, DayCountTimeCalculator
from varswap.infra.config import TASK_QUEUE, ResolutionConfig, TemporalWorkerConfig


class TestResolutionConfig:
    def test_default_day_count(self) -> None:
        assert ResolutionConfig().day_count == DayCountConvention.ACT_ACT_ISDA

    def test_builds_calculator(self) -> None:
        calc = ResolutionConfig(day_count=DayCountConvention.ACT_365).time_calculator()
        assert calc == DayCountTimeCalculator(convention=DayCountConvention.ACT_365)


class TestTemporalWorkerConfig:
    def test_defaults(self) -> None:
        cfg = TemporalWorkerConfig()
        assert cfg.target_host == "localhost:7233"
        assert cfg.namespace == "default"
        assert cfg.task_queue == TASK_QUEUE
        assert cfg.resolution == ResolutionConfig()

    def test_empty_host_rejected(self) -> None:
        with pytest.raises(TypeError):
            TemporalWorkerConfig(target_host="")

    def test_empty_task_queue_rejected(self) -> None:
        with pytest.raises(TypeError):
            TemporalWorkerConfig(task_queue="")
