"""Configuration loading and saving utilities.

Supports YAML and JSON configuration files with schema validation.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from container_exporter.core.errors import ConfigError
from container_exporter.core.schemas import ExporterConfig


def load_config(path: Path | str | None = None) -> ExporterConfig:
    """Load and validate an exporter configuration file.

    Args:
        path: Path to YAML or JSON configuration file. None returns defaults.

    Returns:
        Validated ExporterConfig object

    Raises:
        ConfigError: If the file is missing, has an unsupported format or is invalid
    """
    if path is None:
        return ExporterConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        try:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e

    try:
        return ExporterConfig.model_validate(data or {})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


SAMPLE_CONFIG = """\
# Container exporter configuration

# Docker Engine endpoint. Leave unset to use DOCKER_HOST / the default socket.
# docker_base_url: "unix:///var/run/docker.sock"
docker_timeout_seconds: 5

# Collector pool capacity and scrape deadline
max_workers: 8
scrape_timeout_seconds: 10

# Exposition
metric_prefix: io_container
listen_address: "0.0.0.0"
port: 9104

log_level: INFO
"""


def write_sample_config(path: Path) -> None:
    """Write a commented sample configuration file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SAMPLE_CONFIG)
