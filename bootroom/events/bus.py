"""Event bus for pub/sub communication."""

from collections import defaultdict
from typing import Callable, TypeVar

from bootroom.events.types import LineupEvent

T = TypeVar("T", bound=LineupEvent)
EventHandler = Callable[[LineupEvent], None]


class EventBus:
    """
    Simple pub/sub event bus between the rendering layer and the engine.

    The rendering layer emits global pointer events; the drag controller
    subscribes to them only while a gesture is in progress. The assignment
    store emits a change event after every committed transition so derived
    views can recompute.

    Example:
        bus = EventBus()

        def on_change(event: LineupChangedEvent):
            print(f"{event.operation}: {event.player_id}")

        bus.subscribe(LineupChangedEvent, on_change)
        bus.emit(LineupChangedEvent(operation="assign", player_id=7))
    """

    def __init__(self) -> None:
        """Initialize the event bus."""
        self._handlers: dict[type[LineupEvent], list[EventHandler]] = defaultdict(list)
        self._global_handlers: list[EventHandler] = []

    def subscribe(
        self,
        event_type: type[T],
        handler: Callable[[T], None],
    ) -> None:
        """
        Register a handler for a specific event type.

        Args:
            event_type: The type of event to handle
            handler: Callback function that receives the event
        """
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler for all events."""
        self._global_handlers.append(handler)

    def unsubscribe(
        self,
        event_type: type[T],
        handler: Callable[[T], None],
    ) -> None:
        """
        Remove a handler for a specific event type.

        Args:
            event_type: The type of event
            handler: The handler to remove
        """
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def unsubscribe_all(self, handler: EventHandler) -> None:
        """Remove a global handler."""
        if handler in self._global_handlers:
            self._global_handlers.remove(handler)

    def emit(self, event: LineupEvent) -> None:
        """
        Emit an event to all registered handlers.

        Handlers for the specific event type are called first,
        then global handlers that receive all events.
        """
        # A handler may unsubscribe itself (e.g. on pointer release)
        for handler in list(self._handlers[type(event)]):
            handler(event)

        for handler in list(self._global_handlers):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        self._global_handlers.clear()

    def handler_count(self, event_type: type[LineupEvent] | None = None) -> int:
        """
        Get the number of registered handlers.

        Args:
            event_type: If provided, count handlers for this type only.
                       If None, count all handlers including global.
        """
        if event_type is None:
            total = sum(len(handlers) for handlers in self._handlers.values())
            return total + len(self._global_handlers)
        return len(self._handlers[event_type])
