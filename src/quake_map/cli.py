"""CLI entrypoint for quake-map."""

from __future__ import annotations

import asyncio
import logging

import click
from rich.console import Console
from rich.table import Table

from quake_map.classifier import CLASSIFIERS, style_feature
from quake_map.config import PERIODS, VIEWS, MapConfig
from quake_map.feeds import FEED_ALL, FEED_MAJOR, load_feed, parse_earthquakes
from quake_map.logging_config import configure_logging

console = Console()

FEED_CHOICES = {"all": FEED_ALL, "major": FEED_MAJOR}


def _load_config(**overrides) -> MapConfig:
    """MapConfig from the environment; bad values become usage errors."""
    try:
        return MapConfig.from_env(**overrides)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


@click.group()
@click.option("--log-level", default="WARNING",
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(log_level: str):
    """Quake Map: interactive map of recent earthquakes and plate boundaries."""
    configure_logging(logging.getLevelName(log_level.upper()))


@cli.command()
@click.option("--output", "-o", default="earthquakes.html", type=click.Path(dir_okay=False),
              help="HTML file to write.")
@click.option("--period", default=None, type=click.Choice(PERIODS), help="USGS summary period.")
@click.option("--view", default="map", type=click.Choice(VIEWS), help="Leaflet map or Plotly globe.")
@click.option("--api-key", default=None, help="Mapbox access token (defaults to MAPBOX_API_KEY).")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any feed failed.")
def render(output: str, period: str | None, view: str, api_key: str | None, strict: bool):
    """Fetch the feeds and write the map to an HTML file."""
    from quake_map.pipeline import run_render_pipeline

    config = _load_config(api_key=api_key, period=period)
    result = asyncio.run(run_render_pipeline(config, output, view=view))

    table = Table(title=f"Rendered {result['output']} ({result['view']})")
    table.add_column("Layer")
    table.add_column("Features", justify="right")
    table.add_column("Status")

    for layer, count in result["layers"].items():
        status = "[red]failed[/]" if layer in result["failed"] else "[green]ok[/]"
        table.add_row(layer, str(count), status)

    console.print(table)

    if strict and result["failed"]:
        raise SystemExit(1)


@cli.command()
@click.option("--feed", default="all", type=click.Choice(list(FEED_CHOICES)))
@click.option("--period", default=None, type=click.Choice(PERIODS), help="USGS summary period.")
@click.option("--limit", default=20, help="Max results to display.")
def recent(feed: str, period: str | None, limit: int):
    """Show recent earthquakes with their map color and radius."""
    config = _load_config(period=period)
    result = asyncio.run(load_feed(config, FEED_CHOICES[feed]))
    if not result.ok:
        raise click.ClickException(str(result.error))

    classifier = CLASSIFIERS[feed]
    quakes = sorted(parse_earthquakes(result.data), key=lambda q: q.magnitude, reverse=True)

    table = Table(title=f"Recent Earthquakes ({feed}, {config.period})")
    table.add_column("Mag", style="bold", width=5)
    table.add_column("Color")
    table.add_column("Radius", justify="right")
    table.add_column("Place")

    for q in quakes[:limit]:
        style = style_feature(q, classifier)
        table.add_row(
            f"{q.magnitude:.1f}",
            f"[{style.fill_color}]■[/] {style.fill_color}",
            f"{style.radius:g}",
            q.place,
        )

    console.print(table)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
