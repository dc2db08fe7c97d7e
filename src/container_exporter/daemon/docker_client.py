"""Docker Engine adapter for container listing and stats sampling.

Wraps the low-level ``docker.APIClient`` so the collection pipeline sees only
typed descriptors and samples. All Docker SDK and transport errors are
translated into the exporter's exception hierarchy at this boundary.

The client is shared by every collector thread of a scrape. ``APIClient`` is a
``requests`` session over the daemon socket, which tolerates concurrent
read-only requests.
"""

from __future__ import annotations

import logging
from typing import Any

import docker
import requests
from docker.errors import DockerException, NotFound
from pydantic import ValidationError

from container_exporter.core.errors import ListError, StatsFetchError, StatsParseError
from container_exporter.core.schemas import ContainerDescriptor, ExporterConfig, RawStatsSample

logger = logging.getLogger(__name__)


class DockerDaemon:
    """Container Lister and Stats Accessor backed by the Docker Engine API.

    Example:
        ```python
        daemon = DockerDaemon.from_config(config)
        for descriptor in daemon.list_containers():
            sample = daemon.fetch_stats(descriptor.id)
        ```
    """

    def __init__(self, api: docker.APIClient) -> None:
        """Initialize the adapter.

        Args:
            api: Low-level Docker API client
        """
        self._api = api

    @classmethod
    def from_config(cls, config: ExporterConfig) -> DockerDaemon:
        """Connect using the configured base URL, or the environment if unset."""
        try:
            if config.docker_base_url:
                api = docker.APIClient(
                    base_url=config.docker_base_url, timeout=config.docker_timeout_seconds
                )
            else:
                api = docker.from_env(timeout=config.docker_timeout_seconds).api
        except DockerException as e:
            raise ListError(f"Could not connect to Docker daemon: {e}") from e
        return cls(api)

    def ping(self) -> bool:
        """Check that the daemon answers."""
        try:
            return bool(self._api.ping())
        except (DockerException, requests.exceptions.RequestException) as e:
            logger.debug(f"Docker ping failed: {e}")
            return False

    def list_containers(self) -> list[ContainerDescriptor]:
        """List running containers.

        Returns:
            Descriptors in daemon order; records without a name are skipped

        Raises:
            ListError: If the daemon cannot be reached or answers unexpectedly
        """
        try:
            records = self._api.containers()
        except (DockerException, requests.exceptions.RequestException) as e:
            raise ListError(f"Could not list containers: {e}") from e

        if not isinstance(records, list):
            raise ListError(f"Unexpected container listing type: {type(records).__name__}")

        descriptors: list[ContainerDescriptor] = []
        for record in records:
            if not record.get("Names"):
                logger.debug(f"Skipping unnamed container {str(record.get('Id', '?'))[:12]}")
                continue
            try:
                descriptors.append(ContainerDescriptor.model_validate(record))
            except ValidationError as e:
                raise ListError(f"Malformed container record: {e}") from e
        return descriptors

    def fetch_stats(self, container_id: str) -> RawStatsSample:
        """Read one stats sample for a container.

        Args:
            container_id: Docker container ID (short or full)

        Raises:
            StatsFetchError: On transport or API failure
            StatsParseError: If the response cannot be parsed
        """
        try:
            payload: Any = self._api.stats(container_id, stream=False)
        except NotFound as e:
            raise StatsFetchError(container_id, "container no longer exists") from e
        except (requests.exceptions.InvalidJSONError, ValueError) as e:
            # Undecodable JSON body
            raise StatsParseError(container_id, str(e)) from e
        except (DockerException, requests.exceptions.RequestException) as e:
            raise StatsFetchError(container_id, str(e)) from e

        return parse_stats(container_id, payload)


def parse_stats(container_id: str, payload: Any) -> RawStatsSample:
    """Validate a raw stats payload.

    Raises:
        StatsParseError: If required counters are missing or malformed
    """
    if not isinstance(payload, dict):
        raise StatsParseError(container_id, f"expected JSON object, got {type(payload).__name__}")
    try:
        return RawStatsSample.model_validate(payload)
    except ValidationError as e:
        raise StatsParseError(container_id, str(e)) from e
