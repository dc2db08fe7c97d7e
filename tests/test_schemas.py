"""Tests for container exporter schemas."""

import pytest
from pydantic import ValidationError

from conftest import make_container_record, make_stats_payload
from container_exporter.core.schemas import (
    BlkioOp,
    ContainerDescriptor,
    CpuStats,
    ExporterConfig,
    RawStatsSample,
)


class TestContainerDescriptor:
    """Tests for ContainerDescriptor schema."""

    def test_from_daemon_record(self):
        record = make_container_record("abc123", "web", labels={"team": "core"})
        descriptor = ContainerDescriptor.model_validate(record)
        assert descriptor.id == "abc123"
        assert descriptor.image == "nginx:latest"
        assert descriptor.labels == {"team": "core"}

    def test_canonical_name_strips_separator(self):
        descriptor = ContainerDescriptor(id="a", names=["/web", "/alias"], image="img")
        assert descriptor.canonical_name == "web"

    def test_canonical_name_without_separator(self):
        descriptor = ContainerDescriptor(id="a", names=["web"], image="img")
        assert descriptor.canonical_name == "web"

    def test_null_labels(self):
        record = make_container_record("abc123", "web")
        record["Labels"] = None
        assert ContainerDescriptor.model_validate(record).labels == {}

    def test_empty_names_rejected(self):
        with pytest.raises(ValidationError):
            ContainerDescriptor(id="a", names=[], image="img")


class TestRawStatsSample:
    """Tests for RawStatsSample parsing."""

    def test_full_payload(self):
        sample = RawStatsSample.model_validate(make_stats_payload())
        assert sample.memory.usage == 512 * 1024 * 1024
        assert sample.cpu.cpu_usage.total_usage == 200
        assert sample.precpu.system_cpu_usage == 1000
        assert sample.networks["eth0"].rx_bytes == 1000
        assert [e.op for e in sample.blkio] == [BlkioOp.READ, BlkioOp.WRITE]

    def test_unknown_blkio_op_is_other(self):
        payload = make_stats_payload(blkio=[{"op": "Sync", "value": 10}, {"value": 5}])
        sample = RawStatsSample.model_validate(payload)
        assert [e.op for e in sample.blkio] == [BlkioOp.OTHER, BlkioOp.OTHER]

    def test_null_sections(self):
        """cgroup v2 hosts report a null blkio list; host-network containers have no networks."""
        payload = make_stats_payload()
        payload["networks"] = None
        payload["blkio_stats"] = {"io_service_bytes_recursive": None}
        sample = RawStatsSample.model_validate(payload)
        assert sample.networks == {}
        assert sample.blkio == []

    def test_missing_sections(self):
        payload = make_stats_payload()
        del payload["networks"]
        del payload["blkio_stats"]
        del payload["precpu_stats"]
        sample = RawStatsSample.model_validate(payload)
        assert sample.networks == {}
        assert sample.blkio == []
        assert sample.precpu.cpu_usage.total_usage == 0

    def test_missing_memory_rejected(self):
        """A stopped container returns empty memory stats."""
        payload = make_stats_payload()
        payload["memory_stats"] = {}
        with pytest.raises(ValidationError):
            RawStatsSample.model_validate(payload)


class TestCpuStats:
    """Tests for CpuStats.cores."""

    def test_online_cpus(self):
        stats = CpuStats.model_validate({"online_cpus": 4, "cpu_usage": {"percpu_usage": [1, 2]}})
        assert stats.cores == 4

    def test_percpu_fallback(self):
        stats = CpuStats.model_validate({"cpu_usage": {"percpu_usage": [1, 2, 3]}})
        assert stats.cores == 3

    def test_default_single_core(self):
        assert CpuStats().cores == 1


class TestExporterConfig:
    """Tests for ExporterConfig schema."""

    def test_defaults(self):
        config = ExporterConfig()
        assert config.max_workers == 8
        assert config.metric_prefix == "io_container"
        assert config.docker_base_url is None

    def test_log_level_normalized(self):
        assert ExporterConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            ExporterConfig(max_workers=0)
        with pytest.raises(ValidationError):
            ExporterConfig(log_level="loud")
        with pytest.raises(ValidationError):
            ExporterConfig(metric_prefix="bad-prefix")

    def test_assignment_validated(self):
        """Command-line overrides go through the same validators as the file."""
        config = ExporterConfig()
        config.log_level = "debug"
        assert config.log_level == "DEBUG"
        with pytest.raises(ValidationError):
            config.log_level = "verbose"
        with pytest.raises(ValidationError):
            config.port = 0
