"""varswap.infra -- configuration."""

from varswap.infra.config import TASK_QUEUE as TASK_QUEUE
from varswap.infra.config import ResolutionConfig as ResolutionConfig
from varswap.infra.config import TemporalWorkerConfig as TemporalWorkerConfig
