"""Application layer: typed events published by the waveform model."""

from .event_bus import EventBus
from .events import (
    Event, TraceLoadedEvent, TraceReloadedEvent, TraceClosedEvent,
    SignalsAddedEvent, SignalRemovedEvent
)

__all__ = [
    'EventBus', 'Event', 'TraceLoadedEvent', 'TraceReloadedEvent', 'TraceClosedEvent',
    'SignalsAddedEvent', 'SignalRemovedEvent'
]
