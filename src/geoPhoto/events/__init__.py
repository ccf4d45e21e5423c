from .bus import Event, EventBus, Subscription
from .map_events import (
    ClustersUpdatedEvent,
    FocusedPhotoChangedEvent,
    GroupActivatedEvent,
    SettingChangedEvent,
)

__all__ = [
    "ClustersUpdatedEvent",
    "Event",
    "EventBus",
    "FocusedPhotoChangedEvent",
    "GroupActivatedEvent",
    "SettingChangedEvent",
    "Subscription",
]
