"""Waveform model: the ordered list of signals a user chose to display.

The model owns one trace session at a time. open() decodes the header and
builds the ScopeTree; add()/add_many() resolve paths against that tree and
extract change points with one pass over the trace body per call. Display
order is insertion order. Every mutation is all-or-nothing: when resolution or
extraction fails the error propagates and the signal list is left as it was.

The model is single-threaded. A host that calls it from several threads must
serialize access itself.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .application import (
    EventBus, TraceLoadedEvent, TraceReloadedEvent, TraceClosedEvent,
    SignalsAddedEvent, SignalRemovedEvent
)
from .change_extractor import ChangeStreamExtractor
from .data_model import (
    IdentifierCode, Segment, ScopeTree, Time, TimeWindow, TraceHeader, Variable, WaveformSignal
)
from .errors import NoTraceLoaded, NotFound
from .path_resolver import (
    PathLike, path_for_index, resolve_index_variable, resolve_variable, split_path
)
from .segment_renderer import render_signal
from .trace_reader import read_header

logger = logging.getLogger(__name__)


class WaveformModel:
    """In-memory store of loaded signals for one open trace."""

    def __init__(self, event_bus: Optional[EventBus] = None) -> None:
        self.event_bus = event_bus
        self.file_path: Optional[str] = None
        self.header: Optional[TraceHeader] = None
        self.end_time: Optional[Time] = None  # Last timestamp seen by the latest extraction
        self._signals: List[WaveformSignal] = []

    @property
    def tree(self) -> Optional[ScopeTree]:
        return self.header.tree if self.header else None

    def _publish(self, event) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)

    def _require_tree(self) -> ScopeTree:
        if self.header is None or self.file_path is None:
            raise NoTraceLoaded("no trace is open")
        return self.header.tree

    def open(self, path: str) -> ScopeTree:
        """Open a trace file, replacing the current session.

        Raises:
            TraceIOError, TraceDecodeError: the current session is kept untouched
        """
        header = read_header(path)
        self.file_path = path
        self.header = header
        self.end_time = None
        self._signals = []
        self._publish(TraceLoadedEvent(file_path=path, variable_count=len(header.tree)))
        return header.tree

    def close(self) -> None:
        """Forget the trace and every loaded signal."""
        if self.file_path is None:
            return
        path = self.file_path
        self.file_path = None
        self.header = None
        self.end_time = None
        self._signals = []
        self._publish(TraceClosedEvent(file_path=path))

    def signals(self) -> Tuple[WaveformSignal, ...]:
        """Loaded signals in display order (read-only view)."""
        return tuple(self._signals)

    def __len__(self) -> int:
        return len(self._signals)

    def _load(self, resolved: Sequence[Tuple[Tuple[str, ...], Variable]]) -> List[WaveformSignal]:
        """Extract all resolved variables in a single pass and build their signals."""
        assert self.file_path is not None
        widths: Dict[IdentifierCode, int] = {var.identifier: var.width for _, var in resolved}
        extractor = ChangeStreamExtractor(self.file_path)
        changes = extractor.extract(widths.keys(), widths)
        self.end_time = extractor.end_time
        return [
            WaveformSignal(
                display_name=var.name,
                path=path,
                identifier=var.identifier,
                kind=var.value_kind,
                width=var.width,
                changes=tuple(changes[var.identifier]),
            )
            for path, var in resolved
        ]

    def add(self, path: PathLike) -> WaveformSignal:
        """Resolve a path, extract its change points and append the signal.

        Raises:
            NoTraceLoaded: if no trace is open
            NotFound: if the path does not name a variable (TypeMismatch included)
            TraceIOError, TraceDecodeError: if extraction fails
        """
        return self.add_many([path])[0]

    def add_many(self, paths: Sequence[PathLike]) -> List[WaveformSignal]:
        """Append several signals, extracting all of them in one pass.

        Either every path is added or, on the first failure, none is.
        """
        tree = self._require_tree()
        resolved = []
        for path in paths:
            segments = split_path(path)
            variable = resolve_variable(tree, segments)
            # Store the declared name so "a" and "a[3:0]" give the same signal path
            resolved.append((segments[:-1] + (variable.name,), variable))
        return self._append(resolved)

    def add_by_index(self, scope_indices: Sequence[int], variable_index: int) -> WaveformSignal:
        """Add the variable addressed by a tree-view row (see path_resolver.resolve_index)."""
        tree = self._require_tree()
        variable = resolve_index_variable(tree, scope_indices, variable_index)
        path = path_for_index(tree, scope_indices, variable_index)
        return self._append([(path, variable)])[0]

    def _append(self, resolved: Sequence[Tuple[Tuple[str, ...], Variable]]) -> List[WaveformSignal]:
        if not resolved:
            return []
        new_signals = self._load(resolved)
        first_index = len(self._signals)
        self._signals.extend(new_signals)
        logger.debug(f"Added {len(new_signals)} signal(s) at index {first_index}")
        self._publish(SignalsAddedEvent(first_index=first_index, count=len(new_signals)))
        return new_signals

    def remove(self, index: int) -> WaveformSignal:
        """Remove and return the signal at a display index.

        Raises:
            IndexError: if no signal is displayed at that index
        """
        if not 0 <= index < len(self._signals):
            raise IndexError(f"signal index {index} out of range (0..{len(self._signals) - 1})")
        signal = self._signals.pop(index)
        self._publish(SignalRemovedEvent(index=index, path=signal.path))
        return signal

    def reload(self) -> List[Tuple[str, ...]]:
        """Re-read the trace file and re-extract every displayed signal in one pass.

        Signals whose path no longer resolves are dropped.

        Returns:
            Paths of the dropped signals

        Raises:
            NoTraceLoaded: if no trace is open
            TraceIOError, TraceDecodeError: the model is kept untouched
        """
        self._require_tree()
        assert self.file_path is not None
        header = read_header(self.file_path)

        resolved = []
        dropped: List[Tuple[str, ...]] = []
        for signal in self._signals:
            try:
                resolved.append((signal.path, resolve_variable(header.tree, signal.path)))
            except NotFound:
                logger.warning(f"Dropping {signal.full_name}: no longer present in {self.file_path}")
                dropped.append(signal.path)

        new_signals = self._load(resolved) if resolved else []
        self.header = header
        self._signals = new_signals
        self._publish(TraceReloadedEvent(file_path=self.file_path, dropped_paths=tuple(dropped)))
        return dropped

    def render(self, index: int, window: TimeWindow, pixel_width: int, **kwargs) -> List[Segment]:
        """Segments for the signal at a display index.

        Unlike a bare render() call, the last change point's span is bounded by
        the trace end time (unless end_time is passed), so a window after the
        signal's last change but before the end of the trace still shows the
        held value.
        """
        kwargs.setdefault("end_time", self.end_time)
        return render_signal(self._signals[index], window, pixel_width, **kwargs)
