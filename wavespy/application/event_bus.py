"""Type-safe publish-subscribe event bus for the application layer."""

from typing import TypeVar, Callable, Type
import logging
from collections import defaultdict

from wavespy.application.events import Event

T = TypeVar('T', bound=Event)


class EventBus:
    """Type-safe publish-subscribe event bus.

    Handlers run synchronously on the publishing thread. A handler subscribed
    to a base class also receives every subclass event, so subscribing to Event
    observes everything the model publishes. Handlers for the most specific
    type run first, each group in subscription order.
    """

    def __init__(self) -> None:
        self._subscribers: dict[Type[Event], list[Callable[[Event], None]]] = defaultdict(list)
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Subscribe to events of specific type (and its subclasses)."""
        self._subscribers[event_type].append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unsubscribe from events; unknown handlers are ignored."""
        handlers = self._subscribers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]

    def handler_count(self, event_type: Type[Event]) -> int:
        """Number of handlers a published event of this type would reach."""
        return sum(len(self._subscribers.get(cls, [])) for cls in event_type.__mro__)

    def publish(self, event: Event) -> None:
        """Deliver an event to every matching subscriber."""
        event_type = type(event)
        # Snapshot so handlers may (un)subscribe while the event is delivered
        handlers = [
            handler
            for cls in event_type.__mro__
            for handler in list(self._subscribers.get(cls, []))
        ]
        self._logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(f"Handler error for {event_type.__name__}: {e}")
                if __debug__:
                    raise

    def clear(self) -> None:
        """Clear all subscriptions."""
        self._subscribers.clear()
