"""Daemon module - Docker Engine access."""

from __future__ import annotations

from container_exporter.daemon.docker_client import DockerDaemon, parse_stats

__all__ = ["DockerDaemon", "parse_stats"]
