"""Assembly of metric family snapshots from collector results."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from container_exporter.core.constants import DEFAULT_METRIC_PREFIX
from container_exporter.monitoring.base import (
    CollectorResult,
    MetricFamilySnapshot,
    MetricKind,
    MetricRow,
)
from container_exporter.monitoring.labels import project_labels


@dataclass(frozen=True)
class MetricDefinition:
    """An exported metric family and the derived value it reads."""

    suffix: str
    help: str
    kind: MetricKind
    attribute: str  # DerivedContainerMetrics field


METRIC_DEFINITIONS: tuple[MetricDefinition, ...] = (
    MetricDefinition("mem_limit", "Container memory limit in bytes", MetricKind.GAUGE, "mem_limit"),
    MetricDefinition("mem_used", "Container memory usage in bytes", MetricKind.GAUGE, "mem_used"),
    MetricDefinition(
        "mem_usage", "Container memory usage as a ratio of the limit (0-1)", MetricKind.GAUGE,
        "mem_usage_ratio",
    ),
    MetricDefinition(
        "cpu_percent", "Container CPU usage in percent of one core", MetricKind.GAUGE, "cpu_percent"
    ),
    MetricDefinition(
        "network_rx_bytes", "Bytes received across all container interfaces", MetricKind.COUNTER,
        "rx_bytes",
    ),
    MetricDefinition(
        "network_tx_bytes", "Bytes transmitted across all container interfaces", MetricKind.COUNTER,
        "tx_bytes",
    ),
    MetricDefinition(
        "blkio_read_bytes", "Bytes read from block devices", MetricKind.COUNTER, "blk_read"
    ),
    MetricDefinition(
        "blkio_write_bytes", "Bytes written to block devices", MetricKind.COUNTER, "blk_write"
    ),
)


def assemble_metrics(
    schema: Sequence[str],
    results: Sequence[CollectorResult],
    prefix: str = DEFAULT_METRIC_PREFIX,
) -> list[MetricFamilySnapshot]:
    """Build one snapshot per declared metric.

    Args:
        schema: Ordered label keys every row is projected onto
        results: Successful collector results; row order follows this order
        prefix: Metric name prefix

    Returns:
        Snapshots in declaration order
    """
    label_names = tuple(schema)
    projected = [
        (project_labels(r.labels, label_names), r.metrics)
        for r in results
        if r.success and r.metrics is not None
    ]

    families: list[MetricFamilySnapshot] = []
    for definition in METRIC_DEFINITIONS:
        rows = tuple(
            MetricRow(label_values=values, value=float(getattr(metrics, definition.attribute)))
            for values, metrics in projected
        )
        families.append(
            MetricFamilySnapshot(
                name=f"{prefix}_{definition.suffix}",
                help=definition.help,
                kind=definition.kind,
                label_names=label_names,
                rows=rows,
            )
        )
    return families
