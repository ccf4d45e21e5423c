"""Tests for the map cluster controller and viewport helpers."""

import pytest

from geoPhoto.events import ClustersUpdatedEvent, EventBus, GroupActivatedEvent
from geoPhoto.library.map_clusters import MapClusterController, region_for_photos
from geoPhoto.models.types import MapRegion, Photo, PhotoGroup
from geoPhoto.navigation.focus import FocusStore
from geoPhoto.settings.manager import SettingsManager


def _region(delta: float) -> MapRegion:
    return MapRegion(latitude=48.0, longitude=16.0, latitude_delta=delta, longitude_delta=delta)


@pytest.fixture
def updates(event_bus: EventBus) -> list[ClustersUpdatedEvent]:
    events: list[ClustersUpdatedEvent] = []
    event_bus.subscribe(ClustersUpdatedEvent, events.append)
    return events


def test_set_photos_clusters_with_default_radius(event_bus, updates, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)

    groups = controller.set_photos(vienna_graz_photos)

    assert len(groups) == 2
    assert controller.radius_km == 5.0
    assert len(updates) == 1
    assert updates[0].groups == groups


def test_same_band_does_not_rebuild(event_bus, updates, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)
    controller.set_photos(vienna_graz_photos)
    controller.handle_region_changed(_region(0.8))
    assert len(updates) == 2

    groups = controller.handle_region_changed(_region(0.6))

    assert len(updates) == 2
    assert controller.region == _region(0.8)
    assert groups == controller.groups


def test_small_move_across_band_is_absorbed(event_bus, updates, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)
    controller.set_photos(vienna_graz_photos)
    controller.handle_region_changed(_region(0.51))
    assert controller.radius_km == 3.0

    controller.handle_region_changed(_region(0.49))
    assert controller.radius_km == 3.0
    assert len(updates) == 2

    controller.handle_region_changed(_region(0.3))
    assert controller.radius_km == 1.0
    assert len(updates) == 3
    assert updates[-1].region == _region(0.3)


def test_large_zoom_out_rebuilds(event_bus, updates, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)
    controller.set_photos(vienna_graz_photos)
    controller.handle_region_changed(_region(0.5))

    groups = controller.handle_region_changed(_region(30.0))

    assert len(groups) == 1
    assert updates[-1].radius_km == 150.0


def test_missing_delta_after_region_rebuilds(event_bus, updates, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)
    controller.set_photos(vienna_graz_photos)
    controller.handle_region_changed(_region(0.3))

    controller.handle_region_changed(None)

    assert controller.radius_km == 5.0
    assert len(updates) == 3


def test_set_photos_keeps_current_region(event_bus, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)
    controller.handle_region_changed(_region(30.0))
    assert controller.groups == []

    groups = controller.set_photos(vienna_graz_photos)

    assert len(groups) == 1


def test_single_photo_group_focuses_photo(event_bus, vienna_graz_photos) -> None:
    focus = FocusStore(event_bus)
    controller = MapClusterController(event_bus, focus)
    activated: list[GroupActivatedEvent] = []
    event_bus.subscribe(GroupActivatedEvent, activated.append)

    single = PhotoGroup(location_name="Graz", photos=[vienna_graz_photos[2]], latitude=47.0707, longitude=15.4395)
    controller.handle_group_activated(single)

    assert focus.focused_photo == vienna_graz_photos[2]
    assert activated == []


def test_multi_photo_group_is_announced(event_bus, vienna_graz_photos) -> None:
    focus = FocusStore(event_bus)
    controller = MapClusterController(event_bus, focus)
    activated: list[GroupActivatedEvent] = []
    event_bus.subscribe(GroupActivatedEvent, activated.append)
    group = controller.set_photos(vienna_graz_photos)[0]

    controller.handle_group_activated(group)

    assert focus.focused_photo is None
    assert [event.group for event in activated] == [group]


def test_clear_publishes_empty_clusters(event_bus, updates, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)
    controller.set_photos(vienna_graz_photos)

    controller.clear()

    assert controller.groups == []
    assert controller.radius_km is None
    assert updates[-1].groups == []


def test_from_settings_reads_rebuild_ratio(tmp_path, event_bus, updates, vienna_graz_photos) -> None:
    settings = SettingsManager(path=tmp_path / "settings.json")
    settings.load()
    settings.set("map.rebuild_ratio", 0.0)
    controller = MapClusterController.from_settings(settings, event_bus)
    controller.set_photos(vienna_graz_photos)
    controller.handle_region_changed(_region(0.51))

    controller.handle_region_changed(_region(0.49))

    assert controller.radius_km == 1.0


def test_region_for_photos_fits_bounds() -> None:
    photos = [
        Photo(id="a", uri="", latitude=47.0, longitude=15.0, timestamp=0),
        Photo(id="b", uri="", latitude=48.0, longitude=17.0, timestamp=0),
    ]
    region = region_for_photos(photos, padding=1.5)

    assert region.latitude == pytest.approx(47.5)
    assert region.longitude == pytest.approx(16.0)
    assert region.latitude_delta == pytest.approx(1.5)
    assert region.longitude_delta == pytest.approx(3.0)


def test_region_for_single_photo_has_minimum_span() -> None:
    region = region_for_photos([Photo(id="a", uri="", latitude=1.0, longitude=2.0, timestamp=0)])
    assert region.latitude_delta == 0.01
    assert region.longitude_delta == 0.01


def test_region_for_no_photos_is_default() -> None:
    assert region_for_photos([]) == MapRegion(51.1657, 10.4515, 5.0, 5.0)
    assert region_for_photos(None) == MapRegion(51.1657, 10.4515, 5.0, 5.0)


def test_leaving_negative_zoom_span_rebuilds(event_bus, updates, vienna_graz_photos) -> None:
    controller = MapClusterController(event_bus)
    controller.set_photos(vienna_graz_photos)
    controller.handle_region_changed(_region(-1.0))
    assert controller.radius_km == 0.1
    assert len(updates) == 2

    controller.handle_region_changed(_region(0.3))

    assert controller.radius_km == 1.0
    assert len(updates) == 3
