"""Monitoring module - Per-scrape container stats collection.

Pipeline stages:
- ContainerCollector: one task per container, derives metrics from a stats sample
- FanOutScheduler: bounded worker pool joined on a CompletionBarrier
- reconcile_schema: label keys common to every successful result
- assemble_metrics: one MetricFamilySnapshot per exported metric

ContainerStatsEngine ties the stages together behind ``scrape()``.
"""

from __future__ import annotations

from container_exporter.monitoring.assembler import METRIC_DEFINITIONS, assemble_metrics
from container_exporter.monitoring.base import (
    CollectorResult,
    ContainerLister,
    DerivedContainerMetrics,
    MetricFamilySnapshot,
    MetricKind,
    MetricRow,
    MetricsSource,
    StatsAccessor,
)
from container_exporter.monitoring.collector import ContainerCollector, derive_metrics
from container_exporter.monitoring.engine import ContainerStatsEngine
from container_exporter.monitoring.labels import (
    build_labels,
    normalize_label_key,
    project_labels,
    reconcile_schema,
)
from container_exporter.monitoring.scheduler import CompletionBarrier, FanOutScheduler

__all__ = [
    "CollectorResult",
    "CompletionBarrier",
    "ContainerCollector",
    "ContainerLister",
    "ContainerStatsEngine",
    "DerivedContainerMetrics",
    "FanOutScheduler",
    "METRIC_DEFINITIONS",
    "MetricFamilySnapshot",
    "MetricKind",
    "MetricRow",
    "MetricsSource",
    "StatsAccessor",
    "assemble_metrics",
    "build_labels",
    "derive_metrics",
    "normalize_label_key",
    "project_labels",
    "reconcile_schema",
]
