"""Label construction and reconciliation.

Containers carry arbitrary, heterogeneous label sets. Every row of every metric
family in a snapshot must share one label schema, so the schema is the set of
keys common to all successful results, in sorted order. Sorting keeps column
order stable across scrapes with the same containers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from container_exporter.core.constants import CONTAINER_LABEL_PREFIX, IMAGE_LABEL, NAME_LABEL
from container_exporter.core.schemas import ContainerDescriptor
from container_exporter.monitoring.base import CollectorResult

logger = logging.getLogger(__name__)


def normalize_label_key(key: str) -> str:
    """Map a raw container label name to a metric label key.

    ``com.example.Team-Name`` -> ``container_label_com_example_team_name``
    """
    return f"{CONTAINER_LABEL_PREFIX}{key.replace('.', '_').replace('-', '_')}".lower()


def build_labels(descriptor: ContainerDescriptor) -> dict[str, str]:
    """Label mapping for one container: name, image and its normalized labels."""
    labels: dict[str, str] = {}
    for key, value in descriptor.labels.items():
        normalized = normalize_label_key(key)
        if normalized in labels:
            # Last label in daemon order wins
            logger.warning(
                f"Container {descriptor.canonical_name}: label {key!r} collides with another "
                f"label on {normalized!r}; keeping {value!r}"
            )
        labels[normalized] = value
    labels[NAME_LABEL] = descriptor.canonical_name
    labels[IMAGE_LABEL] = descriptor.image
    return labels


def reconcile_schema(results: Sequence[CollectorResult]) -> tuple[str, ...]:
    """Label keys shared by every result, sorted.

    Args:
        results: Successful collector results

    Returns:
        Ordered label schema; empty if there are no results
    """
    if not results:
        return ()

    common = set(results[0].labels)
    for result in results[1:]:
        common &= result.labels.keys()
    return tuple(sorted(common))


def project_labels(labels: Mapping[str, str], schema: Sequence[str]) -> tuple[str, ...]:
    """Label values in schema order; keys outside the schema are dropped."""
    return tuple(labels[key] for key in schema)
