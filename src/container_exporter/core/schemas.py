"""Pydantic schemas for the container exporter.

This module defines the data contracts at the edges of the collection pipeline:
the exporter configuration, and the container listing and stats payloads
returned by the Docker Engine API. Raw payloads are parsed once, here, into
typed models so the collectors never scan loosely-typed dictionaries.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from container_exporter.core.constants import (
    DEFAULT_DOCKER_TIMEOUT_SECONDS,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_METRIC_PREFIX,
    DEFAULT_PORT,
    DEFAULT_SCRAPE_TIMEOUT_SECONDS,
)


class ExporterConfig(BaseModel):
    """Top-level exporter configuration.

    This is the main configuration loaded from YAML/JSON files.
    """

    docker_base_url: str | None = Field(
        default=None,
        description="Docker Engine URL (e.g. unix:///var/run/docker.sock). None = environment",
    )
    docker_timeout_seconds: int = Field(
        default=DEFAULT_DOCKER_TIMEOUT_SECONDS, ge=1, description="Per-request API timeout"
    )
    max_workers: int = Field(
        default=DEFAULT_MAX_WORKERS, ge=1, le=256, description="Collector pool capacity"
    )
    scrape_timeout_seconds: float | None = Field(
        default=DEFAULT_SCRAPE_TIMEOUT_SECONDS,
        gt=0,
        description="Max time to wait for all collectors. None = wait indefinitely",
    )
    metric_prefix: str = Field(default=DEFAULT_METRIC_PREFIX, pattern=r"^[a-zA-Z_][a-zA-Z0-9_]*$")
    listen_address: str = Field(default=DEFAULT_LISTEN_ADDRESS)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    log_level: str = Field(default="INFO")

    model_config = {"validate_assignment": True}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


# =============================================================================
# DOCKER ENGINE PAYLOADS
# =============================================================================


class ContainerDescriptor(BaseModel):
    """A running container as reported by ``GET /containers/json``."""

    id: str = Field(..., alias="Id", min_length=1)
    names: list[str] = Field(..., alias="Names", min_length=1)
    image: str = Field(..., alias="Image")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")

    model_config = {"populate_by_name": True, "frozen": True, "extra": "ignore"}

    @field_validator("labels", mode="before")
    @classmethod
    def null_labels(cls, v: Any) -> Any:
        """The daemon reports ``Labels: null`` for unlabelled containers."""
        return {} if v is None else v

    @property
    def canonical_name(self) -> str:
        """First name with its leading separator stripped (``/web`` -> ``web``)."""
        name = self.names[0]
        return name[1:] if name.startswith("/") else name


class BlkioOp(str, Enum):
    """Block I/O operation kind."""

    READ = "read"
    WRITE = "write"
    OTHER = "other"


class BlkioEntry(BaseModel):
    """One ``io_service_bytes_recursive`` entry, tagged at parse time."""

    op: BlkioOp = BlkioOp.OTHER
    value: int = Field(default=0, ge=0)

    model_config = {"extra": "ignore"}

    @field_validator("op", mode="before")
    @classmethod
    def normalize_op(cls, v: Any) -> BlkioOp:
        """Case-insensitive match on read/write; anything else is OTHER."""
        if isinstance(v, BlkioOp):
            return v
        try:
            return BlkioOp(str(v).lower())
        except ValueError:
            return BlkioOp.OTHER


class NetworkInterfaceStats(BaseModel):
    """Counters for one network interface."""

    rx_bytes: int = Field(default=0, ge=0)
    tx_bytes: int = Field(default=0, ge=0)

    model_config = {"extra": "ignore"}


class MemoryStats(BaseModel):
    """Container memory counters in bytes."""

    usage: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)

    model_config = {"extra": "ignore"}


class CpuUsage(BaseModel):
    total_usage: int = Field(default=0, ge=0)
    percpu_usage: list[int] | None = None

    model_config = {"extra": "ignore"}


class CpuStats(BaseModel):
    """One CPU reading (``cpu_stats`` or ``precpu_stats``)."""

    cpu_usage: CpuUsage = Field(default_factory=CpuUsage)
    system_cpu_usage: int = Field(default=0, ge=0)
    online_cpus: int | None = None

    model_config = {"extra": "ignore"}

    @property
    def cores(self) -> int:
        """Number of CPUs the reading covers.

        Prefers ``online_cpus``; cgroup v1 hosts only report ``percpu_usage``.
        """
        if self.online_cpus:
            return self.online_cpus
        if self.cpu_usage.percpu_usage:
            return len(self.cpu_usage.percpu_usage)
        return 1


class RawStatsSample(BaseModel):
    """One ``GET /containers/{id}/stats?stream=false`` response.

    Attributes:
        memory: Current memory usage and limit
        cpu: Current CPU counters
        precpu: CPU counters from the previous read
        networks: Per-interface network counters (empty if none reported)
        blkio: Block I/O byte entries, already tagged by operation
    """

    memory: MemoryStats = Field(..., alias="memory_stats")
    cpu: CpuStats = Field(..., alias="cpu_stats")
    precpu: CpuStats = Field(default_factory=CpuStats, alias="precpu_stats")
    networks: dict[str, NetworkInterfaceStats] = Field(default_factory=dict)
    blkio: list[BlkioEntry] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def flatten_payload(cls, data: Any) -> Any:
        """Lift ``blkio_stats.io_service_bytes_recursive`` and drop nulls."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("networks") is None:
            data.pop("networks", None)
        if data.get("precpu_stats") is None:
            data.pop("precpu_stats", None)
        if "blkio" not in data:
            blkio_stats = data.pop("blkio_stats", None) or {}
            data["blkio"] = blkio_stats.get("io_service_bytes_recursive") or []
        return data
