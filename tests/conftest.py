"""Shared fixtures: Docker payload builders and an in-memory daemon."""

from __future__ import annotations

import threading
from typing import Any

import pytest

from container_exporter.core.errors import ListError, StatsFetchError
from container_exporter.core.schemas import ContainerDescriptor, RawStatsSample


def make_stats_payload(
    memory_usage: int = 512 * 1024 * 1024,  # 512 MB
    memory_limit: int = 1024 * 1024 * 1024,  # 1 GB
    total_usage: int = 200,
    pre_total_usage: int = 100,
    system_usage: int = 1100,
    pre_system_usage: int = 1000,
    online_cpus: int | None = 2,
    networks: dict[str, dict[str, int]] | None = None,
    blkio: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Create a mock ``/containers/{id}/stats?stream=false`` response."""
    return {
        "read": "2024-01-01T00:00:01.000000000Z",
        "memory_stats": {"usage": memory_usage, "limit": memory_limit, "stats": {}},
        "cpu_stats": {
            "cpu_usage": {"total_usage": total_usage},
            "system_cpu_usage": system_usage,
            "online_cpus": online_cpus,
        },
        "precpu_stats": {
            "cpu_usage": {"total_usage": pre_total_usage},
            "system_cpu_usage": pre_system_usage,
            "online_cpus": online_cpus,
        },
        "networks": networks
        if networks is not None
        else {"eth0": {"rx_bytes": 1000, "tx_bytes": 500, "rx_packets": 10}},
        "blkio_stats": {
            "io_service_bytes_recursive": blkio
            if blkio is not None
            else [
                {"major": 8, "minor": 0, "op": "Read", "value": 4096},
                {"major": 8, "minor": 0, "op": "Write", "value": 2048},
            ]
        },
    }


def make_container_record(
    container_id: str,
    name: str,
    image: str = "nginx:latest",
    labels: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Create a mock ``/containers/json`` entry."""
    return {
        "Id": container_id,
        "Names": [f"/{name}"],
        "Image": image,
        "Labels": labels if labels is not None else {},
        "State": "running",
    }


class FakeDaemon:
    """In-memory lister and stats accessor.

    Containers listed in ``failing`` raise StatsFetchError; containers in
    ``hanging`` block until ``release`` is set.
    """

    def __init__(
        self,
        records: list[dict[str, Any]],
        payloads: dict[str, dict[str, Any]] | None = None,
        failing: set[str] | None = None,
        hanging: set[str] | None = None,
        list_error: bool = False,
    ) -> None:
        self.records = records
        self.payloads = payloads or {}
        self.failing = failing or set()
        self.hanging = hanging or set()
        self.list_error = list_error
        self.release = threading.Event()
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def ping(self) -> bool:
        return not self.list_error

    def list_containers(self) -> list[ContainerDescriptor]:
        if self.list_error:
            raise ListError("Could not list containers: connection refused")
        return [ContainerDescriptor.model_validate(r) for r in self.records]

    def fetch_stats(self, container_id: str) -> RawStatsSample:
        with self._lock:
            self.calls.append(container_id)
        if container_id in self.hanging:
            self.release.wait(timeout=30)
        if container_id in self.failing:
            raise StatsFetchError(container_id, "connection reset by peer")
        payload = self.payloads.get(container_id, make_stats_payload())
        return RawStatsSample.model_validate(payload)


@pytest.fixture
def fake_daemon_factory():
    """Build FakeDaemons and release any hanging calls after the test."""
    created: list[FakeDaemon] = []

    def factory(*args: Any, **kwargs: Any) -> FakeDaemon:
        daemon = FakeDaemon(*args, **kwargs)
        created.append(daemon)
        return daemon

    yield factory

    for daemon in created:
        daemon.release.set()
