"""CLI for the container exporter.

Provides a rich command-line interface using Typer for:
- Serving container metrics over HTTP for Prometheus
- Running a single scrape and printing the result
- Generating a sample configuration file
"""

from __future__ import annotations

import time
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from container_exporter.core.config import load_config, write_sample_config
from container_exporter.core.errors import ConfigError, ListError
from container_exporter.core.schemas import ExporterConfig
from container_exporter.daemon.docker_client import DockerDaemon
from container_exporter.exposition.prometheus import render_text, start_exporter
from container_exporter.monitoring.base import MetricFamilySnapshot
from container_exporter.monitoring.engine import ContainerStatsEngine
from container_exporter.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="container-exporter",
    help="Docker container resource metrics for Prometheus",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _load(config: Path | None) -> ExporterConfig:
    try:
        return load_config(config)
    except ConfigError as e:
        console.print(f"[bold red]Error loading config: {e}[/]")
        raise typer.Exit(1) from e


def _apply_overrides(exporter_config: ExporterConfig, **overrides: object) -> None:
    """Set command-line values on the config, validating each one."""
    try:
        for field_name, value in overrides.items():
            if value is not None:
                setattr(exporter_config, field_name, value)
    except ValidationError as e:
        console.print(f"[bold red]Invalid option: {e}[/]")
        raise typer.Exit(1) from e


def _build_engine(exporter_config: ExporterConfig) -> ContainerStatsEngine:
    try:
        daemon = DockerDaemon.from_config(exporter_config)
    except ListError as e:
        console.print(f"[bold red]{e}[/]")
        raise typer.Exit(1) from e

    if not daemon.ping():
        logger.warning("Docker daemon did not answer ping; scrapes will be empty until it does")

    return ContainerStatsEngine.from_config(exporter_config, daemon, daemon)


@app.command()
def serve(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to exporter configuration file (YAML/JSON)"
    ),
    address: str | None = typer.Option(None, "--address", "-a", help="Listen address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Listen port"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Logging level"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file in addition to console"
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Output logs in JSON format (for log shippers)"
    ),
) -> None:
    """Serve container metrics on /metrics until interrupted."""
    exporter_config = _load(config)

    # Command-line options override the configuration file
    _apply_overrides(exporter_config, listen_address=address, port=port, log_level=log_level)

    setup_logging(
        level=exporter_config.log_level,
        log_file=log_file,
        json_format=json_logs,
        rich_console=not json_logs,
    )

    engine = _build_engine(exporter_config)
    start_exporter(engine, exporter_config.listen_address, exporter_config.port)

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down")


@app.command()
def scrape(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to exporter configuration file (YAML/JSON)"
    ),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format: text, table"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level"),
) -> None:
    """Run a single scrape and print the metrics."""
    if output_format not in ("text", "table"):
        console.print(f"[bold red]Unknown format: {output_format}[/]")
        raise typer.Exit(1)

    exporter_config = _load(config)
    _apply_overrides(exporter_config, log_level=log_level)

    setup_logging(level=exporter_config.log_level)
    engine = _build_engine(exporter_config)

    if output_format == "text":
        # Plain print keeps the exposition format free of rich markup
        print(render_text(engine), end="")
    else:
        _show_snapshot_table(engine.scrape())


@app.command()
def init_config(
    output: Path = typer.Option(
        Path("config.yaml"), "--output", "-o", help="Output configuration file"
    ),
) -> None:
    """Generate a sample configuration file."""
    write_sample_config(output)
    console.print(f"[bold green]Sample configuration written to {output}[/]")


def _show_snapshot_table(families: list[MetricFamilySnapshot]) -> None:
    """Display one scrape as a container-by-metric table."""
    if not families or not families[0].rows:
        console.print("[bold yellow]No containers collected[/]")
        return

    table = Table(title="Container Metrics")
    for label in families[0].label_names:
        table.add_column(label, style="cyan")
    for family in families:
        table.add_column(family.name, style="white", justify="right")

    for i, row in enumerate(families[0].rows):
        values = [_format_value(family.rows[i].value) for family in families]
        table.add_row(*row.label_values, *values)

    console.print(table)


def _format_value(value: float) -> str:
    return f"{int(value):,}" if value.is_integer() else f"{value:.4f}"


if __name__ == "__main__":
    app()
