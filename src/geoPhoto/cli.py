"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .core.geometry import distance_km
from .core.grouping import (
    cluster_radius_km,
    group_photos_by_location_name,
    group_photos_by_proximity,
)
from .core.validation import filter_valid_photos, validate_location
from .errors import GeoPhotoError, LocationValidationError, PhotoSourceError, SettingsError
from .io.photo_source import describe_timestamp, dump_groups, dump_photos, load_photos
from .library.map_clusters import region_for_photos
from .models.types import MapRegion, Photo, PhotoGroup
from .settings.manager import SettingsManager
from .utils.geocoding import label_photos
from .utils.jsonio import write_json
from .utils.logging import get_logger, setup_logging

LOGGER = get_logger(__name__)

app = typer.Typer(help="Group geotagged photos for map and gallery views")
console = Console()


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (PhotoSourceError, SettingsError, LocationValidationError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except GeoPhotoError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
def main(
    ctx: typer.Context,
    settings: Optional[Path] = typer.Option(None, "--settings", help="Path to settings.json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging and settings shared by every command."""

    setup_logging(logging.DEBUG if verbose else logging.INFO)
    ctx.obj = {"settings_path": settings}


def _settings(ctx: typer.Context) -> SettingsManager:
    obj = ctx.obj or {}
    manager = obj.get("settings")
    if manager is None:
        manager = SettingsManager(path=obj.get("settings_path"))
        manager.load()
        obj["settings"] = manager
        ctx.obj = obj
    return manager


def _load(ctx: typer.Context, path: Path) -> List[Photo]:
    photos = load_photos(path)
    if _settings(ctx).get("validation.drop_invalid", True):
        photos = filter_valid_photos(photos)
    return photos


def _render_groups(groups: List[PhotoGroup], title: str) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Location")
    table.add_column("Photos", justify="right")
    table.add_column("Centroid")
    table.add_column("Latest (UTC)")
    for index, group in enumerate(groups, start=1):
        table.add_row(
            str(index),
            group.location_name,
            str(len(group.photos)),
            f"{group.latitude:.5f}, {group.longitude:.5f}",
            describe_timestamp(group.latest_timestamp),
        )
    console.print(table)


def _emit(groups: List[PhotoGroup], title: str, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(dump_groups(groups), ensure_ascii=False, indent=2))
    else:
        _render_groups(groups, title)


@app.command()
@_handle_errors
def cluster(
    ctx: typer.Context,
    photos_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Photo catalogue JSON"),
    latitude_delta: Optional[float] = typer.Option(
        None, "--latitude-delta", "-d", help="Map zoom span in degrees"
    ),
    fit: bool = typer.Option(False, "--fit", help="Use a viewport that fits every photo"),
    as_json: bool = typer.Option(False, "--json", help="Print groups as JSON"),
) -> None:
    """Cluster photos by distance for the map view."""

    photos = _load(ctx, photos_path)
    region: Optional[MapRegion] = None
    if latitude_delta is not None:
        region = MapRegion(0.0, 0.0, latitude_delta, latitude_delta)
    elif fit:
        region = region_for_photos(photos)
    radius = cluster_radius_km(region.latitude_delta if region is not None else None)
    groups = group_photos_by_proximity(photos, region)
    LOGGER.info("Clustered %d photos into %d groups at %s km", len(photos), len(groups), radius)
    _emit(groups, f"Proximity clusters (radius {radius:g} km)", as_json)


@app.command()
@_handle_errors
def group(
    ctx: typer.Context,
    photos_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Photo catalogue JSON"),
    geocode: Optional[bool] = typer.Option(
        None, "--geocode/--no-geocode", help="Resolve missing place names first"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print groups as JSON"),
) -> None:
    """Group photos by place name for the gallery view."""

    photos = _load(ctx, photos_path)
    if geocode is None:
        geocode = bool(_settings(ctx).get("gallery.geocode_missing", False))
    if geocode:
        photos = label_photos(photos)
    groups = group_photos_by_location_name(photos)
    _emit(groups, "Photos by location", as_json)


@app.command()
def radius(latitude_delta: float = typer.Argument(..., help="Map zoom span in degrees")) -> None:
    """Print the clustering radius used for a zoom span."""

    print(f"[green]{cluster_radius_km(latitude_delta):g} km")


@app.command()
def distance(
    lat1: float = typer.Argument(...),
    lon1: float = typer.Argument(...),
    lat2: float = typer.Argument(...),
    lon2: float = typer.Argument(...),
) -> None:
    """Print the great-circle distance between two coordinates."""

    print(f"[green]{distance_km(lat1, lon1, lat2, lon2):.3f} km")


@app.command()
@_handle_errors
def validate(
    photos_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Photo catalogue JSON"),
) -> None:
    """Report photos whose coordinates are out of range."""

    photos = load_photos(photos_path)
    invalid = 0
    for photo in photos:
        result = validate_location(photo)
        if result.valid:
            continue
        invalid += 1
        print(f"[red]{photo.id}[/red]: {'; '.join(result.errors)}")
    if invalid:
        typer.echo(f"{invalid} of {len(photos)} photos failed validation", err=True)
        raise typer.Exit(1)
    print(f"[green]All {len(photos)} photos are valid")


@app.command()
@_handle_errors
def label(
    ctx: typer.Context,
    photos_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Photo catalogue JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the labelled catalogue here"),
) -> None:
    """Fill in missing place names by reverse geocoding."""

    photos = label_photos(_load(ctx, photos_path))
    document = dump_photos(photos)
    if output is None:
        typer.echo(json.dumps(document, ensure_ascii=False, indent=2))
        return
    write_json(output, document)
    resolved = sum(1 for photo in photos if photo.location_name)
    print(f"[green]Wrote {len(photos)} photos ({resolved} labelled) to {output}")


if __name__ == "__main__":
    app()
