"""Data models used by geoPhoto."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(slots=True, frozen=True)
class Photo:
    """A geotagged photo supplied by the media library layer."""

    id: str
    uri: str
    """Opaque reference to the image bytes; never interpreted here."""

    latitude: float
    longitude: float
    timestamp: int
    """Capture time in epoch milliseconds."""

    location_name: Optional[str] = None
    """Human-readable place label; ``None`` or ``""`` means unresolved."""

    def with_location_name(self, location_name: Optional[str]) -> "Photo":
        return replace(self, location_name=location_name)


@dataclass(slots=True)
class PhotoGroup:
    """Photos displayed as one unit with a shared label and centroid."""

    location_name: str
    photos: list[Photo] = field(default_factory=list)
    latitude: float = 0.0
    longitude: float = 0.0

    @property
    def latest_timestamp(self) -> int:
        """Return the capture time of the most recent member."""

        return max((photo.timestamp for photo in self.photos), default=0)


@dataclass(slots=True, frozen=True)
class MapRegion:
    """Visible map area described by its centre and zoom span."""

    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float
