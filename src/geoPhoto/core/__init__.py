from .geometry import centroid, distance_km, format_coordinate_label, to_fixed
from .grouping import (
    cluster_radius_km,
    group_photos_by_location_name,
    group_photos_by_proximity,
    location_key,
)

__all__ = [
    "centroid",
    "cluster_radius_km",
    "distance_km",
    "format_coordinate_label",
    "group_photos_by_location_name",
    "group_photos_by_proximity",
    "location_key",
    "to_fixed",
]
