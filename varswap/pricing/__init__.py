"""varswap.pricing -- snapshot types consumed by pricers."""

from varswap.pricing.types import VarianceSwap as VarianceSwap
