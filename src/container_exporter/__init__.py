"""Container exporter - Docker container resource metrics for Prometheus."""

from __future__ import annotations

from container_exporter.core.schemas import ContainerDescriptor, ExporterConfig, RawStatsSample
from container_exporter.monitoring.base import MetricFamilySnapshot, MetricKind, MetricRow
from container_exporter.monitoring.engine import ContainerStatsEngine

__version__ = "0.1.0"

__all__ = [
    "ContainerDescriptor",
    "ContainerStatsEngine",
    "ExporterConfig",
    "MetricFamilySnapshot",
    "MetricKind",
    "MetricRow",
    "RawStatsSample",
    "__version__",
]
