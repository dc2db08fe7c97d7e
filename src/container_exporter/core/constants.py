"""Shared constants for the container exporter.

Centralized constants to avoid duplication and ensure consistency across modules.
"""

from __future__ import annotations

# Prefix applied to every exported metric family name.
DEFAULT_METRIC_PREFIX = "io_container"

# Label keys every collector result carries in addition to container labels.
NAME_LABEL = "name"
IMAGE_LABEL = "image"
CONTAINER_LABEL_PREFIX = "container_label_"

# Derived ratios (memory usage, CPU share) are rounded half-up to this many places.
RATIO_DECIMAL_PLACES = 4

# Worker pool capacity for the per-scrape fan-out.
DEFAULT_MAX_WORKERS = 8

# Upper bound for waiting on all collectors within one scrape.
DEFAULT_SCRAPE_TIMEOUT_SECONDS = 10.0

# Per-request timeout for the Docker Engine API.
DEFAULT_DOCKER_TIMEOUT_SECONDS = 5

DEFAULT_LISTEN_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 9104
