"""Observable holder for the photo the map should focus on.

The gallery sets a photo when the user asks to "show on map"; the map view
subscribes and recentres.  Change notifications travel over an injected
:class:`~geoPhoto.events.bus.EventBus`; the store itself holds no global
state.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..config import FOCUS_REGION_DELTA
from ..events.bus import EventBus
from ..events.map_events import FocusedPhotoChangedEvent
from ..models.types import MapRegion, Photo

FocusListener = Callable[[Optional[Photo]], None]


class FocusStore:
    """Hold the currently focused photo and announce every change."""

    def __init__(self, event_bus: EventBus) -> None:
        self._events = event_bus
        self._focused: Optional[Photo] = None

    @property
    def focused_photo(self) -> Optional[Photo]:
        return self._focused

    def set_focused_photo(self, photo: Optional[Photo]) -> None:
        self._focused = photo
        self._events.publish(FocusedPhotoChangedEvent(photo=photo))

    def clear_focused_photo(self) -> None:
        self.set_focused_photo(None)

    def subscribe(self, listener: FocusListener) -> Callable[[], None]:
        """Call *listener* with the new photo on every change.

        Returns a callable that detaches the listener again.
        """

        subscription = self._events.subscribe(
            FocusedPhotoChangedEvent, lambda event: listener(event.photo)
        )

        def _unsubscribe() -> None:
            self._events.unsubscribe(subscription)

        return _unsubscribe


def focus_region(photo: Photo, delta: float = FOCUS_REGION_DELTA) -> MapRegion:
    """Return the viewport centred on *photo*."""

    return MapRegion(
        latitude=photo.latitude,
        longitude=photo.longitude,
        latitude_delta=delta,
        longitude_delta=delta,
    )
