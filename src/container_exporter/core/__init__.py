"""Core module - configuration, schemas and errors."""

from __future__ import annotations

from container_exporter.core.config import load_config
from container_exporter.core.errors import (
    ConfigError,
    ExporterError,
    ListError,
    StatsError,
    StatsFetchError,
    StatsParseError,
)
from container_exporter.core.schemas import (
    BlkioEntry,
    BlkioOp,
    ContainerDescriptor,
    CpuStats,
    ExporterConfig,
    MemoryStats,
    NetworkInterfaceStats,
    RawStatsSample,
)

__all__ = [
    "BlkioEntry",
    "BlkioOp",
    "ConfigError",
    "ContainerDescriptor",
    "CpuStats",
    "ExporterConfig",
    "ExporterError",
    "ListError",
    "load_config",
    "MemoryStats",
    "NetworkInterfaceStats",
    "RawStatsSample",
    "StatsError",
    "StatsFetchError",
    "StatsParseError",
]
