"""Tests for the Prometheus exposition adapter."""

import re

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

from container_exporter.exposition.prometheus import (
    SnapshotCollector,
    build_registry,
    render_text,
    to_metric_family,
)
from container_exporter.monitoring.base import MetricFamilySnapshot, MetricKind, MetricRow


class StaticSource:
    """Metrics source returning fixed snapshots and counting scrapes."""

    def __init__(self, snapshots):
        self.snapshots = snapshots
        self.scrapes = 0

    def scrape(self):
        self.scrapes += 1
        return self.snapshots


GAUGE = MetricFamilySnapshot(
    name="io_container_mem_limit",
    help="Container memory limit in bytes",
    kind=MetricKind.GAUGE,
    label_names=("image", "name"),
    rows=(MetricRow(("nginx", "web"), 1024.0),),
)
COUNTER = MetricFamilySnapshot(
    name="io_container_network_rx_bytes",
    help="Bytes received across all container interfaces",
    kind=MetricKind.COUNTER,
    label_names=("image", "name"),
    rows=(MetricRow(("nginx", "web"), 100.0),),
)


class TestToMetricFamily:
    """Tests for to_metric_family."""

    def test_gauge(self):
        family = to_metric_family(GAUGE)
        assert isinstance(family, GaugeMetricFamily)
        assert family.samples[0].labels == {"image": "nginx", "name": "web"}
        assert family.samples[0].value == 1024.0

    def test_counter(self):
        family = to_metric_family(COUNTER)
        assert isinstance(family, CounterMetricFamily)
        assert family.samples[0].name == "io_container_network_rx_bytes_total"


class TestRegistry:
    """Tests for registry integration."""

    def test_render_text(self):
        text = render_text(StaticSource([GAUGE, COUNTER]))

        assert "# TYPE io_container_mem_limit gauge" in text
        assert 'io_container_mem_limit{image="nginx",name="web"} 1024.0' in text
        # Newer prometheus_client releases name the TYPE line after the _total sample
        assert re.search(r"^# TYPE io_container_network_rx_bytes(_total)? counter$", text, re.M)
        assert 'io_container_network_rx_bytes_total{image="nginx",name="web"} 100.0' in text

    def test_registration_does_not_scrape(self):
        source = StaticSource([GAUGE])
        build_registry(source)
        assert source.scrapes == 0

    def test_each_collection_scrapes(self):
        source = StaticSource([GAUGE])
        registry = build_registry(source)
        list(registry.collect())
        list(registry.collect())
        assert source.scrapes == 2

    def test_empty_snapshot(self):
        assert list(SnapshotCollector(StaticSource([])).collect()) == []
