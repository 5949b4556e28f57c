from .bus import Event, EventBus, Subscription
from .document_events import (
    DocumentChangedEvent,
    DocumentClosedEvent,
    DocumentOpenedEvent,
    NavigationChangedEvent,
    ThumbnailReadyEvent,
)

__all__ = [
    "DocumentChangedEvent",
    "DocumentClosedEvent",
    "DocumentOpenedEvent",
    "Event",
    "EventBus",
    "NavigationChangedEvent",
    "Subscription",
    "ThumbnailReadyEvent",
]
