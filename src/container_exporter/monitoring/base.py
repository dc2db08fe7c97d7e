"""Shared types for the per-scrape collection pipeline.

The pipeline talks to the daemon through two narrow protocols, and hands its
output to the exposition layer through a third. Everything defined here is
scrape-scoped: created when a scrape starts and discarded once its snapshot is
produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from container_exporter.core.schemas import ContainerDescriptor, RawStatsSample


class ContainerLister(Protocol):
    """Supplies the running containers for one scrape."""

    def list_containers(self) -> list[ContainerDescriptor]:
        """Raises ListError if the listing cannot be obtained."""
        ...


class StatsAccessor(Protocol):
    """Returns one raw stats sample per container."""

    def fetch_stats(self, container_id: str) -> RawStatsSample:
        """Raises StatsFetchError or StatsParseError on failure."""
        ...


@dataclass(frozen=True)
class DerivedContainerMetrics:
    """Values computed from one raw stats sample."""

    mem_limit: int = 0
    mem_used: int = 0
    mem_usage_ratio: float = 0.0  # 0-1, 4-decimal half-up
    cpu_percent: float = 0.0  # 0 to cores * 100
    rx_bytes: int = 0
    tx_bytes: int = 0
    blk_read: int = 0
    blk_write: int = 0


@dataclass
class CollectorResult:
    """Outcome of one per-container collector task."""

    container_id: str
    labels: dict[str, str] = field(default_factory=dict)
    success: bool = False
    metrics: DerivedContainerMetrics | None = None
    error: str | None = None


class MetricKind(str, Enum):
    GAUGE = "gauge"
    COUNTER = "counter"


@dataclass(frozen=True)
class MetricRow:
    label_values: tuple[str, ...]
    value: float


@dataclass(frozen=True)
class MetricFamilySnapshot:
    """One metric family, ready for the exposition layer.

    Every row's ``label_values`` line up with ``label_names``.
    """

    name: str
    help: str
    kind: MetricKind
    label_names: tuple[str, ...]
    rows: tuple[MetricRow, ...] = ()


class MetricsSource(Protocol):
    """Anything that can produce the current metric families for a scrape."""

    def scrape(self) -> list[MetricFamilySnapshot]:
        ...
