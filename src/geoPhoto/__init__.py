"""Geographic grouping of geotagged photos for map and gallery views."""

from __future__ import annotations

from .core.geometry import distance_km
from .core.grouping import (
    cluster_radius_km,
    group_photos_by_location_name,
    group_photos_by_proximity,
)
from .models.types import MapRegion, Photo, PhotoGroup

__version__ = "0.1.0"

__all__ = [
    "MapRegion",
    "Photo",
    "PhotoGroup",
    "__version__",
    "cluster_radius_km",
    "distance_km",
    "group_photos_by_location_name",
    "group_photos_by_proximity",
]
