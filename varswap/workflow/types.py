"""Activity I/O types for variance swap resolution.

All types: @final @dataclass(frozen=True, slots=True).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import final

from varswap.core.calendar import DayCountConvention
from varswap.core.timeseries import ObservationSeries
from varswap.instrument.variance_swap import VarianceSwapDefinition
from varswap.pricing.types import VarianceSwap


@final
@dataclass(frozen=True, slots=True)
class ResolveInput:
    """One definition, one valuation date, the fixings known so far."""

    definition: VarianceSwapDefinition
    valuation_date: datetime
    observations: ObservationSeries = ObservationSeries.EMPTY
    # None: use the worker's ResolutionConfig
    day_count: DayCountConvention | None = None


@final
@dataclass(frozen=True, slots=True)
class ResolveOutput:
    """Wrapper for the resolved swap or the reason it could not be resolved."""

    result: VarianceSwap | None = None
    error: str | None = None
    error_code: str | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise TypeError(
                "ResolveOutput must have exactly one of result or error"
            )
