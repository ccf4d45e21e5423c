"""Events emitted by the map and gallery views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..models.types import MapRegion, Photo, PhotoGroup
from .bus import Event


@dataclass(kw_only=True)
class FocusedPhotoChangedEvent(Event):
    photo: Optional[Photo] = None


@dataclass(kw_only=True)
class ClustersUpdatedEvent(Event):
    groups: List[PhotoGroup] = field(default_factory=list)
    region: Optional[MapRegion] = None
    radius_km: float = 0.0


@dataclass(kw_only=True)
class GroupActivatedEvent(Event):
    group: PhotoGroup


@dataclass(kw_only=True)
class SettingChangedEvent(Event):
    key: str
    value: Any = None
