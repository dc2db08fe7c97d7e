"""Derived-metric arithmetic for container stats samples.

Follows the calculations the Docker CLI uses for ``docker stats``:
https://github.com/moby/moby/blob/eb131c5383db8cac633919f82abad86c99bffbe5/cli/command/container/stats_helpers.go

Functions:
    round_half_up: Decimal-exact half-up rounding of a ratio
    compute_memory_usage_ratio: usage / limit
    compute_cpu_percent: CPU share over the sampling window, scaled by cores
    sum_network_bytes: rx/tx totals across interfaces
    sum_blkio_bytes: read/write totals across block I/O entries
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal

from container_exporter.core.constants import RATIO_DECIMAL_PLACES
from container_exporter.core.schemas import (
    BlkioEntry,
    BlkioOp,
    CpuStats,
    MemoryStats,
    NetworkInterfaceStats,
)

_QUANTUM = Decimal(1).scaleb(-RATIO_DECIMAL_PLACES)


def round_half_up(numerator: int | float, denominator: int | float) -> float:
    """Divide and round half-up to ``RATIO_DECIMAL_PLACES`` places.

    Binary floats round half-to-even and misrepresent ties, so the division is
    done in Decimal.

    Args:
        numerator: Dividend
        denominator: Divisor, must be non-zero

    Returns:
        Rounded quotient as float
    """
    quotient = Decimal(str(numerator)) / Decimal(str(denominator))
    return float(quotient.quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def compute_memory_usage_ratio(memory: MemoryStats) -> float:
    """Memory usage as a 0-1 ratio of the limit.

    Returns:
        Rounded ratio, 0.0 if the limit is zero
    """
    if memory.limit <= 0:
        return 0.0
    return round_half_up(memory.usage, memory.limit)


def compute_cpu_percent(cpu: CpuStats, precpu: CpuStats) -> float:
    """CPU utilization between two readings, in percent of one core.

    A container saturating two cores reports 200.0.

    Args:
        cpu: Current reading
        precpu: Previous reading

    Returns:
        CPU percent, exactly 0.0 unless both the container and system deltas are positive
    """
    cpu_delta = cpu.cpu_usage.total_usage - precpu.cpu_usage.total_usage
    system_delta = cpu.system_cpu_usage - precpu.system_cpu_usage

    if system_delta > 0 and cpu_delta > 0:
        return round_half_up(cpu_delta, system_delta) * cpu.cores * 100.0
    return 0.0


def sum_network_bytes(networks: Mapping[str, NetworkInterfaceStats]) -> tuple[int, int]:
    """Total received and transmitted bytes across all interfaces."""
    rx_bytes = 0
    tx_bytes = 0
    for iface in networks.values():
        rx_bytes += iface.rx_bytes
        tx_bytes += iface.tx_bytes
    return rx_bytes, tx_bytes


def sum_blkio_bytes(entries: Iterable[BlkioEntry]) -> tuple[int, int]:
    """Total read and write bytes; entries tagged OTHER are ignored."""
    read_bytes = 0
    write_bytes = 0
    for entry in entries:
        if entry.op is BlkioOp.READ:
            read_bytes += entry.value
        elif entry.op is BlkioOp.WRITE:
            write_bytes += entry.value
    return read_bytes, write_bytes
