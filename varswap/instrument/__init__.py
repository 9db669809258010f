"""varswap.instrument -- variance swap terms and their resolution."""

from varswap.instrument.resolver import resolve_many as resolve_many
from varswap.instrument.resolver import resolve_variance_swap as resolve_variance_swap
from varswap.instrument.variance_swap import (
    VarianceSwapDefinition as VarianceSwapDefinition,
)
from varswap.instrument.variance_swap import (
    count_expected_good_days as count_expected_good_days,
)
