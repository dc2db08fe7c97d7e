"""Fan-out of per-container collectors onto a bounded worker pool.

Each scrape creates one ``ContainerCollector`` per container, submits them all
to a ``ThreadPoolExecutor`` and blocks on a ``CompletionBarrier`` until every
collector has signalled (or the scrape deadline passes). Collectors signal from
a ``finally`` block, so a failing container can never stall the join.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from container_exporter.core.constants import DEFAULT_MAX_WORKERS, DEFAULT_SCRAPE_TIMEOUT_SECONDS
from container_exporter.monitoring.collector import ContainerCollector

if TYPE_CHECKING:
    from collections.abc import Sequence

    from container_exporter.core.schemas import ContainerDescriptor
    from container_exporter.monitoring.base import CollectorResult, StatsAccessor

logger = logging.getLogger(__name__)


class CompletionBarrier:
    """Count-down latch released when every dispatched task has signalled."""

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"Barrier count must be non-negative, got {count}")
        self._count = count
        self._cond = threading.Condition()

    @property
    def remaining(self) -> int:
        with self._cond:
            return self._count

    def count_down(self) -> None:
        with self._cond:
            if self._count > 0:
                self._count -= 1
                if self._count == 0:
                    self._cond.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the count reaches zero.

        Args:
            timeout: Seconds to wait, None to wait indefinitely

        Returns:
            True if released, False if the timeout expired first
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)


class FanOutScheduler:
    """Runs one collector per container and joins on their completion.

    Example:
        ```python
        scheduler = FanOutScheduler(daemon, max_workers=8, timeout_seconds=10)
        results = scheduler.run(daemon.list_containers())
        ```
    """

    def __init__(
        self,
        accessor: StatsAccessor,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout_seconds: float | None = DEFAULT_SCRAPE_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the scheduler.

        Args:
            accessor: Stats source shared by all collectors
            max_workers: Pool capacity; excess collectors queue
            timeout_seconds: Deadline for the whole fan-out, None to wait indefinitely
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._accessor = accessor
        self._max_workers = max_workers
        self._timeout_seconds = timeout_seconds

    def run(self, descriptors: Sequence[ContainerDescriptor]) -> list[CollectorResult]:
        """Collect all containers and return the successful results.

        Collectors still running at the deadline are treated as failed.

        Returns:
            Successful results, in descriptor order
        """
        if not descriptors:
            return []

        barrier = CompletionBarrier(len(descriptors))
        collectors = [ContainerCollector(d, self._accessor, barrier) for d in descriptors]

        start = time.monotonic()
        executor = ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(collectors)),
            thread_name_prefix="container-collector",
        )
        try:
            for collector in collectors:
                executor.submit(collector.run)
            released = barrier.wait(self._timeout_seconds)
        finally:
            # Never join stragglers: a hung daemon call must not hold up the scrape
            executor.shutdown(wait=False, cancel_futures=True)

        if not released:
            logger.warning(
                f"Scrape deadline of {self._timeout_seconds}s reached with "
                f"{barrier.remaining}/{len(collectors)} collectors still pending"
            )

        results: list[CollectorResult] = []
        for collector in collectors:
            if not collector.finished.is_set():
                logger.warning(f"Timed out collecting container {collector.result.container_id[:12]}")
                continue
            if collector.result.success:
                results.append(collector.result)

        logger.debug(
            f"Collected {len(results)}/{len(collectors)} containers "
            f"in {time.monotonic() - start:.3f}s"
        )
        return results
