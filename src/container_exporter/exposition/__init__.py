"""Exposition module - Prometheus adapter."""

from __future__ import annotations

from container_exporter.exposition.prometheus import (
    SnapshotCollector,
    build_registry,
    render_text,
    start_exporter,
    to_metric_family,
)

__all__ = [
    "SnapshotCollector",
    "build_registry",
    "render_text",
    "start_exporter",
    "to_metric_family",
]
