"""Per-container collector task.

One ``ContainerCollector`` runs per container per scrape on a worker thread. It
builds the container's labels, requests a single stats sample and derives the
exported values. Its only side effects are its own ``CollectorResult`` and one
count-down on the shared completion barrier.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from container_exporter.core.errors import StatsError
from container_exporter.monitoring.base import CollectorResult, DerivedContainerMetrics
from container_exporter.monitoring.labels import build_labels
from container_exporter.monitoring.stats_math import (
    compute_cpu_percent,
    compute_memory_usage_ratio,
    sum_blkio_bytes,
    sum_network_bytes,
)

if TYPE_CHECKING:
    from container_exporter.core.schemas import ContainerDescriptor, RawStatsSample
    from container_exporter.monitoring.base import StatsAccessor
    from container_exporter.monitoring.scheduler import CompletionBarrier

logger = logging.getLogger(__name__)


def derive_metrics(sample: RawStatsSample) -> DerivedContainerMetrics:
    """Compute exported values from one raw stats sample."""
    rx_bytes, tx_bytes = sum_network_bytes(sample.networks)
    blk_read, blk_write = sum_blkio_bytes(sample.blkio)

    return DerivedContainerMetrics(
        mem_limit=sample.memory.limit,
        mem_used=sample.memory.usage,
        mem_usage_ratio=compute_memory_usage_ratio(sample.memory),
        cpu_percent=compute_cpu_percent(sample.cpu, sample.precpu),
        rx_bytes=rx_bytes,
        tx_bytes=tx_bytes,
        blk_read=blk_read,
        blk_write=blk_write,
    )


class ContainerCollector:
    """Collects derived metrics for a single container.

    Example:
        ```python
        collector = ContainerCollector(descriptor, daemon, barrier)
        result = collector.run()
        if result.success:
            print(result.metrics.cpu_percent)
        ```
    """

    def __init__(
        self,
        descriptor: ContainerDescriptor,
        accessor: StatsAccessor,
        barrier: CompletionBarrier | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            descriptor: Container to collect
            accessor: Source of raw stats samples
            barrier: Completion barrier to count down when done
        """
        self._descriptor = descriptor
        self._accessor = accessor
        self._barrier = barrier
        self.result = CollectorResult(container_id=descriptor.id)
        self.finished = threading.Event()

    def run(self) -> CollectorResult:
        """Collect, always signalling the barrier on exit."""
        try:
            self.result.labels = build_labels(self._descriptor)
            sample = self._accessor.fetch_stats(self._descriptor.id)
            self.result.metrics = derive_metrics(sample)
            self.result.success = True
            logger.debug(f"Collected {self._descriptor.canonical_name}: {self.result.metrics}")
        except StatsError as e:
            self.result.success = False
            self.result.error = str(e)
            logger.warning(f"Skipping container {self._descriptor.canonical_name}: {e}")
        except Exception:
            self.result.success = False
            logger.exception(f"Unexpected error collecting {self._descriptor.canonical_name}")
            raise
        finally:
            self.finished.set()
            if self._barrier is not None:
                self._barrier.count_down()

        return self.result
