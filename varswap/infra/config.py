"""Configuration for resolution and the Temporal worker.

Pure configuration data with defaults. No environment access here;
hosts build these dataclasses from whatever settings source they use.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from varswap.core.calendar import DayCountConvention, DayCountTimeCalculator

TASK_QUEUE: str = "variance-swap-resolution"


@final
@dataclass(frozen=True, slots=True)
class ResolutionConfig:
    """How valuation-date offsets are measured."""

    day_count: DayCountConvention = DayCountConvention.ACT_ACT_ISDA

    def time_calculator(self) -> DayCountTimeCalculator:
        return DayCountTimeCalculator(convention=self.day_count)


@final
@dataclass(frozen=True, slots=True)
class TemporalWorkerConfig:
    """Where the resolution worker connects and which queue it polls."""

    target_host: str = "localhost:7233"
    namespace: str = "default"
    task_queue: str = TASK_QUEUE
    resolution: ResolutionConfig = ResolutionConfig()

    def __post_init__(self) -> None:
        if not self.target_host:
            raise TypeError("TemporalWorkerConfig.target_host must be non-empty")
        if not self.task_queue:
            raise TypeError("TemporalWorkerConfig.task_queue must be non-empty")
