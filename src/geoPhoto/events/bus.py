"""Synchronous publish/subscribe bus connecting stores, controllers and views."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Type

from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(kw_only=True)
class Event:
    """Base event class."""

    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


Handler = Callable[[Event], None]


@dataclass
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`."""

    event_type: Type[Event]
    handler: Handler
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Deliver events to handlers on the publishing thread.

    Handlers registered for a base class also receive its subclasses, so a
    subscriber to :class:`Event` observes everything published on the bus.
    A failing handler is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[Event], List[Subscription]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[Event], handler: Handler) -> Subscription:
        subscription = Subscription(event_type=event_type, handler=handler)
        with self._lock:
            self._handlers.setdefault(event_type, []).append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.cancel()
        with self._lock:
            subscribers = self._handlers.get(subscription.event_type, [])
            if subscription in subscribers:
                subscribers.remove(subscription)

    def publish(self, event: Event) -> None:
        with self._lock:
            targets = [
                subscription
                for event_type in type(event).__mro__
                for subscription in self._handlers.get(event_type, ())
            ]

        for subscription in targets:
            if not subscription.active:
                continue
            try:
                subscription.handler(event)
            except Exception:
                LOGGER.exception("Handler for %s failed", type(event).__name__)


__all__ = ["Event", "EventBus", "Handler", "Subscription"]
