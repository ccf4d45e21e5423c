"""Controller that keeps map clusters in sync with photos and viewport."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from ..config import CLUSTER_REBUILD_RATIO, DEFAULT_REGION, MIN_REGION_DELTA, REGION_PADDING
from ..core.grouping import cluster_radius_km, group_photos_by_proximity
from ..events.bus import EventBus
from ..events.map_events import ClustersUpdatedEvent, GroupActivatedEvent
from ..models.types import MapRegion, Photo, PhotoGroup
from ..navigation.focus import FocusStore
from ..settings.manager import SettingsManager
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


def _delta(region: Optional[MapRegion]) -> Optional[float]:
    if region is None:
        return None
    value = region.latitude_delta
    if not value or math.isnan(value):
        return None
    return value


class MapClusterController:
    """Own the clusters shown on the map and rebuild them lazily.

    Clustering is quadratic in the number of photos, so viewport changes
    that would not move the result are absorbed here instead of reaching
    :func:`group_photos_by_proximity`.
    """

    def __init__(
        self,
        event_bus: EventBus,
        focus_store: Optional[FocusStore] = None,
        *,
        rebuild_ratio: float = CLUSTER_REBUILD_RATIO,
    ) -> None:
        self._events = event_bus
        self._focus = focus_store
        self._rebuild_ratio = float(rebuild_ratio)
        self._photos: list[Photo] = []
        self._groups: list[PhotoGroup] = []
        self._region: Optional[MapRegion] = None
        self._radius_km: Optional[float] = None

    @classmethod
    def from_settings(
        cls,
        settings: SettingsManager,
        event_bus: EventBus,
        focus_store: Optional[FocusStore] = None,
    ) -> "MapClusterController":
        """Build a controller using the user's ``map.rebuild_ratio``."""

        ratio = settings.get("map.rebuild_ratio", CLUSTER_REBUILD_RATIO)
        return cls(event_bus, focus_store, rebuild_ratio=ratio)

    @property
    def groups(self) -> List[PhotoGroup]:
        return list(self._groups)

    @property
    def region(self) -> Optional[MapRegion]:
        """Viewport the current clusters were built for."""

        return self._region

    @property
    def radius_km(self) -> Optional[float]:
        return self._radius_km

    def set_photos(self, photos: Optional[Iterable[Photo]]) -> List[PhotoGroup]:
        """Replace the photo catalogue and rebuild clusters immediately."""

        self._photos = list(photos or [])
        return self._rebuild(self._region)

    def handle_region_changed(self, region: Optional[MapRegion]) -> List[PhotoGroup]:
        """Record the latest viewport and rebuild clusters when warranted."""

        if self._needs_rebuild(region):
            return self._rebuild(region)
        return self.groups

    def handle_group_activated(self, group: PhotoGroup) -> None:
        """Focus a single photo, or announce a multi-photo group for the gallery."""

        if len(group.photos) == 1 and self._focus is not None:
            self._focus.set_focused_photo(group.photos[0])
            return
        self._events.publish(GroupActivatedEvent(group=group))

    def clear(self) -> None:
        """Drop photos and clusters and tell listeners the map is empty."""

        self._photos = []
        self._groups = []
        self._region = None
        self._radius_km = None
        self._events.publish(ClustersUpdatedEvent(groups=[], region=None, radius_km=0.0))

    def _needs_rebuild(self, region: Optional[MapRegion]) -> bool:
        if self._radius_km is None:
            return True
        if cluster_radius_km(_delta(region)) == self._radius_km:
            return False
        previous = _delta(self._region)
        current = _delta(region)
        if previous is None or current is None:
            return True
        return abs(current - previous) / abs(previous) > self._rebuild_ratio

    def _rebuild(self, region: Optional[MapRegion]) -> List[PhotoGroup]:
        radius = cluster_radius_km(_delta(region))
        self._groups = group_photos_by_proximity(self._photos, region)
        self._region = region
        self._radius_km = radius
        LOGGER.debug(
            "Rebuilt %d map clusters for %d photos at %.3f km",
            len(self._groups),
            len(self._photos),
            radius,
        )
        self._events.publish(
            ClustersUpdatedEvent(groups=self.groups, region=region, radius_km=radius)
        )
        return self.groups


def region_for_photos(
    photos: Optional[Iterable[Photo]],
    padding: float = REGION_PADDING,
) -> MapRegion:
    """Return a viewport that fits every photo, or the default region."""

    members = [
        photo
        for photo in photos or ()
        if math.isfinite(photo.latitude) and math.isfinite(photo.longitude)
    ]
    if not members:
        return MapRegion(*DEFAULT_REGION)

    min_lat = min(photo.latitude for photo in members)
    max_lat = max(photo.latitude for photo in members)
    min_lon = min(photo.longitude for photo in members)
    max_lon = max(photo.longitude for photo in members)
    return MapRegion(
        latitude=(min_lat + max_lat) / 2,
        longitude=(min_lon + max_lon) / 2,
        latitude_delta=max((max_lat - min_lat) * padding, MIN_REGION_DELTA),
        longitude_delta=max((max_lon - min_lon) * padding, MIN_REGION_DELTA),
    )
