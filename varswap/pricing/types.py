"""Pricing-side views of a variance swap.

VarianceSwap is the snapshot a pricer consumes: the contract resolved
against one valuation date. Times are signed year fractions measured
from that date; observations are the realized fixings strictly before it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from varswap.core.types import Currency


@final
@dataclass(frozen=True, slots=True)
class VarianceSwap:
    """A variance swap as of a valuation date."""

    time_to_obs_start: float
    time_to_obs_end: float
    time_to_settlement: float
    var_strike: float
    var_notional: float
    currency: Currency
    annualization_factor: float
    n_obs_expected: int
    n_obs_disrupted: int
    observations: tuple[float, ...]
    observation_weights: tuple[float, ...] = ()  # reserved for non-uniform weighting

    def __post_init__(self) -> None:
        if self.n_obs_disrupted < 0:
            raise TypeError(
                f"VarianceSwap.n_obs_disrupted must be >= 0, got {self.n_obs_disrupted}"
            )

    @property
    def n_obs_actual(self) -> int:
        """Number of realized observations."""
        return len(self.observations)

    @property
    def observations_started(self) -> bool:
        return self.time_to_obs_start <= 0
