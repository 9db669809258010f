"""Temporal activity wrapping variance swap resolution.

The activity is a thin wrapper. All domain logic lives in the pure
library layer (varswap.instrument). It:
- is decorated with @activity.defn
- takes a single frozen-dataclass input
- returns a frozen-dataclass output carrying either the result or an error
- is idempotent (same input -> same output, no side effects)

The activity is a method of ResolutionActivities so that the worker's
ResolutionConfig supplies the day count whenever the input leaves it unset.
"""

from __future__ import annotations

from temporalio import activity

from varswap.core.result import Err, Ok
from varswap.infra.config import ResolutionConfig
from varswap.instrument.resolver import resolve_variance_swap
from varswap.workflow.types import ResolveInput, ResolveOutput


class ResolutionActivities:
    """Resolution activities bound to a worker-level ResolutionConfig."""

    def __init__(self, config: ResolutionConfig | None = None) -> None:
        self.config = config or ResolutionConfig()

    def config_for(self, inp: ResolveInput) -> ResolutionConfig:
        """The worker config, with the input's day count taking precedence."""
        if inp.day_count is None:
            return self.config
        return ResolutionConfig(day_count=inp.day_count)

    @activity.defn(name="resolve_variance_swap")
    async def resolve_variance_swap(self, inp: ResolveInput) -> ResolveOutput:
        """Resolve a definition as of inp.valuation_date.

        Timeout: 30s | Retries: 1 (validation failures are not retried)
        Idempotent: yes (pure function of input and worker config)
        """
        config = self.config_for(inp)
        activity.logger.info(
            "Resolving variance swap as of %s with %d observations (%s)",
            inp.valuation_date.isoformat(), len(inp.observations), config.day_count.value,
        )
        match resolve_variance_swap(
            inp.definition, inp.valuation_date, inp.observations,
            time_calculator=config.time_calculator(),
        ):
            case Ok(swap):
                return ResolveOutput(result=swap)
            case Err(e):
                activity.logger.warning("Resolution rejected [%s]: %s", e.code, e.message)
                return ResolveOutput(error=e.message, error_code=e.code)
