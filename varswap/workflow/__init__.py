"""varswap.workflow -- Temporal.io activity surface for resolution."""

from varswap.workflow.types import ResolveInput as ResolveInput
from varswap.workflow.types import ResolveOutput as ResolveOutput
