"""Event classes published by the WaveformModel."""

from dataclasses import dataclass, field
import time


@dataclass(frozen=True, kw_only=True)
class Event:
    """Base class for all events."""
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, kw_only=True)
class TraceLoadedEvent(Event):
    """Emitted when a trace file is opened and its scope tree is ready."""
    file_path: str
    variable_count: int


@dataclass(frozen=True, kw_only=True)
class TraceReloadedEvent(Event):
    """Emitted after a reload re-extracted the displayed signals."""
    file_path: str
    dropped_paths: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True, kw_only=True)
class TraceClosedEvent(Event):
    """Emitted when the current trace is closed."""
    file_path: str


@dataclass(frozen=True, kw_only=True)
class SignalsAddedEvent(Event):
    """Emitted when signals are appended to the display list."""
    first_index: int
    count: int


@dataclass(frozen=True, kw_only=True)
class SignalRemovedEvent(Event):
    """Emitted when a signal is removed from the display list."""
    index: int
    path: tuple[str, ...]
