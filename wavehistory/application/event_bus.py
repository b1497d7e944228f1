"""Type-safe publish-subscribe event bus for the application layer."""

from typing import TypeVar, Callable, Type
import logging
from collections import defaultdict

from wavehistory.application.events import Event

T = TypeVar('T', bound=Event)


class EventBus:
    """Type-safe publish-subscribe event bus.

    Handlers subscribed to a base event class also receive its subclasses,
    so a view can subscribe once to HistoryChangedEvent.
    """
    
    def __init__(self) -> None:
        self._subscribers: dict[Type[Event], list[Callable[[Event], None]]] = defaultdict(list)
        self._logger = logging.getLogger(__name__)
    
    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Subscribe to events of specific type."""
        # Cast is safe because we ensure type consistency
        self._subscribers[event_type].append(handler)  # type: ignore[arg-type]
    
    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unsubscribe from events."""
        handlers = self._subscribers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]
                
    def publish(self, event: Event) -> None:
        """Publish event to all subscribers of its class and base classes."""
        event_type = type(event)
        handlers: list[Callable[[Event], None]] = []
        for klass in event_type.__mro__:
            handlers.extend(self._subscribers.get(klass, []))
        
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(f"Handler error for {event_type.__name__}: {e}")
                if __debug__:
                    raise
    
    def has_subscribers(self, event_type: Type[Event]) -> bool:
        return bool(self._subscribers.get(event_type))
    
    def clear(self) -> None:
        """Clear all subscriptions."""
        self._subscribers.clear()
    
    def clear_event_type(self, event_type: Type[Event]) -> None:
        """Clear all subscriptions for a specific event type."""
        self._subscribers.pop(event_type, None)
