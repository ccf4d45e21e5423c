"""Tests for the geophoto command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from geoPhoto.cli import app
from geoPhoto.io.photo_source import dump_photos
from geoPhoto.models.types import Photo
from geoPhoto.utils import geocoding

runner = CliRunner()


def _json_from(output: str):
    # Log lines may share the captured stream, so decode from the first JSON block.
    starts = [output.index(marker) for marker in ("[\n", "{\n") if marker in output]
    assert starts, output
    start = min(starts)
    payload, _ = json.JSONDecoder().raw_decode(output[start:])
    return payload


@pytest.fixture
def catalogue(tmp_path: Path, vienna_graz_photos) -> Path:
    path = tmp_path / "photos.json"
    path.write_text(json.dumps(dump_photos(vienna_graz_photos)), encoding="utf-8")
    return path


@pytest.fixture
def settings_args(tmp_path: Path) -> list[str]:
    return ["--settings", str(tmp_path / "settings.json")]


def test_cluster_json_splits_by_zoom(catalogue: Path, settings_args: list[str]) -> None:
    result = runner.invoke(app, [*settings_args, "cluster", str(catalogue), "-d", "0.3", "--json"])
    assert result.exit_code == 0, result.output

    groups = _json_from(result.output)
    assert [len(group["photos"]) for group in groups] == [2, 1]
    assert [group["locationName"] for group in groups] == ["Vienna", "Graz"]


def test_cluster_table_output(catalogue: Path, settings_args: list[str]) -> None:
    result = runner.invoke(app, [*settings_args, "cluster", str(catalogue), "--fit"])
    assert result.exit_code == 0, result.output
    assert "Vienna" in result.output


def test_group_json_without_geocoding(catalogue: Path, settings_args: list[str], monkeypatch) -> None:
    def _fail():
        raise AssertionError("geocoder must not be used")

    monkeypatch.setattr(geocoding, "_geocoder", _fail)
    result = runner.invoke(app, [*settings_args, "group", str(catalogue), "--json", "--no-geocode"])
    assert result.exit_code == 0, result.output

    groups = _json_from(result.output)
    assert [group["locationName"] for group in groups] == ["Graz", "Vienna"]


def test_radius_command() -> None:
    result = runner.invoke(app, ["radius", "0.51"])
    assert result.exit_code == 0
    assert "3 km" in result.output


def test_distance_command() -> None:
    result = runner.invoke(app, ["distance", "0", "0", "0", "1"])
    assert result.exit_code == 0
    assert "111.195 km" in result.output


def test_validate_reports_invalid_photos(tmp_path: Path) -> None:
    path = tmp_path / "photos.json"
    photos = [
        Photo(id="ok", uri="", latitude=10.0, longitude=20.0, timestamp=0),
        Photo(id="bad", uri="", latitude=95.0, longitude=20.0, timestamp=0),
    ]
    path.write_text(json.dumps(dump_photos(photos)), encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 1
    assert "bad" in result.output
    assert "1 of 2 photos failed validation" in result.output


def test_validate_accepts_valid_catalogue(catalogue: Path) -> None:
    result = runner.invoke(app, ["validate", str(catalogue)])
    assert result.exit_code == 0
    assert "All 3 photos are valid" in result.output


def test_label_writes_output_file(tmp_path: Path, settings_args: list[str], monkeypatch) -> None:
    class _Stub:
        def query(self, coords):
            return [{"name": "Vienna", "admin1": "Vienna", "admin2": "", "cc": "AT"}]

    monkeypatch.setattr(geocoding, "_geocoder", lambda: _Stub())
    source = tmp_path / "photos.json"
    source.write_text(
        json.dumps(dump_photos([Photo(id="1", uri="", latitude=48.2, longitude=16.37, timestamp=0)])),
        encoding="utf-8",
    )
    target = tmp_path / "labelled.json"

    result = runner.invoke(app, [*settings_args, "label", str(source), "-o", str(target)])
    assert result.exit_code == 0, result.output

    document = json.loads(target.read_text(encoding="utf-8"))
    assert document["photos"][0]["locationName"] == "Vienna — Vienna"


def test_invalid_catalogue_exits_with_error(tmp_path: Path, settings_args: list[str]) -> None:
    path = tmp_path / "photos.json"
    path.write_text(json.dumps({"photos": [{"id": "a"}]}), encoding="utf-8")

    result = runner.invoke(app, [*settings_args, "cluster", str(path)])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_group_rejects_timestamp_outside_calendar(tmp_path: Path, settings_args: list[str]) -> None:
    path = tmp_path / "photos.json"
    path.write_text(
        json.dumps([{"id": "a", "latitude": 48.2, "longitude": 16.3, "timestamp": 10**18}]),
        encoding="utf-8",
    )

    result = runner.invoke(app, [*settings_args, "group", str(path), "--no-geocode"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Timestamp out of range" in result.output
