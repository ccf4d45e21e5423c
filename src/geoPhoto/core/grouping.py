"""Geographic grouping of photos for the map and gallery views.

Two strategies share the :class:`~geoPhoto.models.types.PhotoGroup` output
shape:

* :func:`group_photos_by_proximity` clusters photos by physical distance
  with a radius that follows the map zoom level.
* :func:`group_photos_by_location_name` groups photos by their resolved
  place label so the gallery stays stable regardless of the viewport.

Both are pure functions.  They accept ``None`` in place of a collection and
never raise for malformed coordinates; validation happens upstream in
:mod:`geoPhoto.core.validation`.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional

from ..config import CLUSTER_RADIUS_BANDS, DEFAULT_CLUSTER_RADIUS_KM, MIN_CLUSTER_RADIUS_KM
from ..models.types import MapRegion, Photo, PhotoGroup
from ..utils.logging import get_logger
from .geometry import centroid, distance_km, format_coordinate_label

LOGGER = get_logger(__name__)


def cluster_radius_km(latitude_delta: Optional[float]) -> float:
    """Return the clustering radius for a viewport spanning *latitude_delta*.

    A missing, zero or NaN delta falls back to the default radius.
    """

    if not latitude_delta or math.isnan(latitude_delta):
        return DEFAULT_CLUSTER_RADIUS_KM
    for lower_bound, radius in CLUSTER_RADIUS_BANDS:
        if latitude_delta > lower_bound:
            return radius
    return MIN_CLUSTER_RADIUS_KM


def _build_group(members: List[Photo], label: Optional[str] = None) -> PhotoGroup:
    latitude, longitude = centroid(members)
    if not label:
        label = members[0].location_name or format_coordinate_label(latitude, longitude)
    return PhotoGroup(
        location_name=label,
        photos=members,
        latitude=latitude,
        longitude=longitude,
    )


def group_photos_by_proximity(
    photos: Optional[Iterable[Photo]],
    region: Optional[MapRegion] = None,
) -> List[PhotoGroup]:
    """Cluster *photos* around seed photos for the current map *region*.

    Photos are visited in input order.  The first unprocessed photo seeds a
    cluster and every other unprocessed photo within the radius of that
    seed joins it.  Membership is measured against the seed only, so two
    members may be up to twice the radius apart.
    """

    if not photos:
        return []
    candidates = list(photos)
    if not candidates:
        return []

    radius = cluster_radius_km(region.latitude_delta if region is not None else None)
    processed: set[str] = set()
    groups: List[PhotoGroup] = []

    for seed in candidates:
        if seed.id in processed:
            continue
        members = [seed]
        processed.add(seed.id)

        for other in candidates:
            if other.id in processed:
                continue
            distance = distance_km(seed.latitude, seed.longitude, other.latitude, other.longitude)
            if distance <= radius:
                members.append(other)
                processed.add(other.id)

        groups.append(_build_group(members))

    LOGGER.debug(
        "Clustered %d photos into %d groups (radius %.3f km)",
        len(candidates),
        len(groups),
        radius,
    )
    return groups


def location_key(photo: Photo) -> str:
    """Return the exact grouping key of *photo* for the gallery view."""

    return photo.location_name or format_coordinate_label(photo.latitude, photo.longitude)


def group_photos_by_location_name(photos: Optional[Iterable[Photo]]) -> List[PhotoGroup]:
    """Group *photos* by place label, newest group first.

    Unlabeled photos are keyed by their own rounded coordinates, so two
    nearby unlabeled photos stay apart unless the rounded values coincide.
    """

    if not photos:
        return []

    buckets: Dict[str, List[Photo]] = {}
    for photo in photos:
        buckets.setdefault(location_key(photo), []).append(photo)

    groups = [_build_group(members, label=key) for key, members in buckets.items()]
    # ``sort`` is stable, so groups sharing a latest timestamp keep their
    # first-encounter order.
    groups.sort(key=lambda group: group.latest_timestamp, reverse=True)

    LOGGER.debug("Grouped %d photos into %d named groups", sum(len(g.photos) for g in groups), len(groups))
    return groups


__all__ = [
    "cluster_radius_km",
    "group_photos_by_location_name",
    "group_photos_by_proximity",
    "location_key",
]
