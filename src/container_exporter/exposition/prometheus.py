"""Prometheus exposition for metric family snapshots.

``SnapshotCollector`` is a custom ``prometheus_client`` collector: every time
the registry is collected (i.e. on every HTTP pull) it runs one scrape of the
underlying metrics source and converts the snapshots into client metric
families. Nothing is cached between pulls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from prometheus_client import CollectorRegistry, generate_latest, start_http_server
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from container_exporter.monitoring.base import MetricFamilySnapshot, MetricKind, MetricsSource

logger = logging.getLogger(__name__)


def to_metric_family(snapshot: MetricFamilySnapshot) -> Metric:
    """Convert one snapshot into a prometheus_client metric family."""
    family_cls = CounterMetricFamily if snapshot.kind is MetricKind.COUNTER else GaugeMetricFamily
    family = family_cls(snapshot.name, snapshot.help, labels=list(snapshot.label_names))
    for row in snapshot.rows:
        family.add_metric(list(row.label_values), row.value)
    return family


class SnapshotCollector:
    """Registry collector that scrapes a metrics source on each collection."""

    def __init__(self, source: MetricsSource) -> None:
        self._source = source

    def describe(self) -> list[Metric]:
        # Families depend on the live containers; don't scrape at registration.
        return []

    def collect(self) -> Iterator[Metric]:
        for snapshot in self._source.scrape():
            yield to_metric_family(snapshot)


def build_registry(source: MetricsSource) -> CollectorRegistry:
    """Dedicated registry exposing only the container metrics."""
    registry = CollectorRegistry(auto_describe=False)
    registry.register(SnapshotCollector(source))
    return registry


def render_text(source: MetricsSource) -> str:
    """Run one scrape and render it in the Prometheus text format."""
    return generate_latest(build_registry(source)).decode("utf-8")


def start_exporter(source: MetricsSource, address: str, port: int) -> CollectorRegistry:
    """Serve ``/metrics`` for the source on a background HTTP server thread."""
    registry = build_registry(source)
    start_http_server(port, addr=address, registry=registry)
    logger.info(f"Serving container metrics on http://{address}:{port}/metrics")
    return registry
