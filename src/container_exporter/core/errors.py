"""Exception hierarchy for the container exporter."""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for all exporter errors."""


class ConfigError(ExporterError):
    """Configuration file is missing, unreadable or invalid."""


class ListError(ExporterError):
    """The daemon could not list running containers.

    Fatal to the scrape it occurs in: the scrape yields an empty snapshot.
    """


class StatsError(ExporterError):
    """Stats for a single container could not be obtained."""

    def __init__(self, container_id: str, message: str) -> None:
        super().__init__(f"{container_id[:12]}: {message}")
        self.container_id = container_id


class StatsFetchError(StatsError):
    """Transport or API failure while requesting a stats sample."""


class StatsParseError(StatsError):
    """The stats response did not have the expected shape."""
