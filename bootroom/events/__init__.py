"""Event system for lineup editing."""

from bootroom.events.bus import EventBus
from bootroom.events.types import (
    LineupChangedEvent,
    LineupEvent,
    PointerMovedEvent,
    PointerReleasedEvent,
)

__all__ = [
    "EventBus",
    "LineupChangedEvent",
    "LineupEvent",
    "PointerMovedEvent",
    "PointerReleasedEvent",
]
