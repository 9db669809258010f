"""Worker for variance swap resolution.

Starts a Temporal worker with the resolution activity registered on the
configured task queue.

Usage::

    import asyncio
    from varswap.workflow.worker import run_worker

    asyncio.run(run_worker())
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from temporalio.client import Client
from temporalio.worker import Worker

from varswap.infra.config import TemporalWorkerConfig
from varswap.workflow.activities import ResolutionActivities
from varswap.workflow.converter import VARSWAP_DATA_CONVERTER


def build_activities(config: TemporalWorkerConfig) -> list[Callable[..., Any]]:
    """Activities bound to config.resolution.

    They resolve with that day count unless an input names its own.
    """
    return [ResolutionActivities(config.resolution).resolve_variance_swap]


def build_worker(client: Client, config: TemporalWorkerConfig) -> Worker:
    """Worker polling config.task_queue with the resolution activity."""
    return Worker(
        client,
        task_queue=config.task_queue,
        activities=build_activities(config),
    )


async def run_worker(config: TemporalWorkerConfig | None = None) -> None:
    """Connect to Temporal and run the worker until interrupted."""
    config = config or TemporalWorkerConfig()
    client = await Client.connect(
        config.target_host, namespace=config.namespace,
        data_converter=VARSWAP_DATA_CONVERTER,
    )
    await build_worker(client, config).run()
