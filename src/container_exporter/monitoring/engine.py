"""Scrape engine: the collection pipeline behind each metrics pull.

``ContainerStatsEngine.scrape()`` lists the running containers, fans the
per-container collectors out, reconciles their labels and assembles the metric
families. Each call is self-contained; nothing carries over between scrapes.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from container_exporter.core.constants import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_METRIC_PREFIX,
    DEFAULT_SCRAPE_TIMEOUT_SECONDS,
)
from container_exporter.core.errors import ListError
from container_exporter.monitoring.assembler import assemble_metrics
from container_exporter.monitoring.labels import reconcile_schema
from container_exporter.monitoring.scheduler import FanOutScheduler

if TYPE_CHECKING:
    from container_exporter.core.schemas import ExporterConfig
    from container_exporter.monitoring.base import (
        ContainerLister,
        MetricFamilySnapshot,
        StatsAccessor,
    )

logger = logging.getLogger(__name__)


class ContainerStatsEngine:
    """Produces container metric families on demand.

    Implements the ``MetricsSource`` protocol.

    Example:
        ```python
        daemon = DockerDaemon.from_config(config)
        engine = ContainerStatsEngine(daemon, daemon, max_workers=8)
        for family in engine.scrape():
            print(family.name, len(family.rows))
        ```
    """

    def __init__(
        self,
        lister: ContainerLister,
        accessor: StatsAccessor,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout_seconds: float | None = DEFAULT_SCRAPE_TIMEOUT_SECONDS,
        metric_prefix: str = DEFAULT_METRIC_PREFIX,
    ) -> None:
        self._lister = lister
        self._scheduler = FanOutScheduler(
            accessor, max_workers=max_workers, timeout_seconds=timeout_seconds
        )
        self._metric_prefix = metric_prefix

    @classmethod
    def from_config(
        cls, config: ExporterConfig, lister: ContainerLister, accessor: StatsAccessor
    ) -> ContainerStatsEngine:
        return cls(
            lister,
            accessor,
            max_workers=config.max_workers,
            timeout_seconds=config.scrape_timeout_seconds,
            metric_prefix=config.metric_prefix,
        )

    def scrape(self) -> list[MetricFamilySnapshot]:
        """Run one scrape.

        Returns:
            Metric families for every container that could be inspected, or an
            empty list if the containers could not be listed
        """
        start = time.monotonic()
        logger.debug("Collecting container stats from Docker daemon")

        try:
            descriptors = self._lister.list_containers()
        except ListError as e:
            logger.error(f"Scrape aborted: {e}")
            return []

        results = self._scheduler.run(descriptors)
        schema = reconcile_schema(results)
        families = assemble_metrics(schema, results, prefix=self._metric_prefix)

        logger.info(
            f"Scraped {len(results)}/{len(descriptors)} containers "
            f"in {(time.monotonic() - start) * 1000:.0f}ms"
        )
        return families
