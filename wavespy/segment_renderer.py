"""Segment renderer: change points to waveform geometry.

Purpose
- Turn one signal's change points, a visible time window and an output width
  into the ordered list of primitives needed to draw its waveform: horizontal
  Levels, vertical Transitions and value Labels.
- Stay independent of any painting backend. Coordinates are integers relative
  to the signal's own row (y = 0 is the row top); segment_painter strokes them
  onto a QPainter.

Key ideas
- Consecutive change points (a, b) form the span [a.time, b.time). A span is
  visible when a.time <= window.end and b.time >= window.start; invisible spans
  emit nothing. The last change point has no successor: its span is bounded by
  the trace end time when known, otherwise it runs to the window's right edge
  but only while the point itself lies inside the window.
- Visible spans are clipped to [max(window.start, a.time), min(window.end + 1, b.time)].
  window.end + 1 is the right edge of the last visible tick.
- Times map to pixels with integer arithmetic,
  x = (t - window.start) * pixel_width // (window.end - window.start + 1),
  so boundaries are stable across redraws and always inside [0, pixel_width].
- Nothing is drawn before the first change point: the value is undefined there.

Rendering by value kind
- SCALAR: one Level per span on the rail of its bit (1 high, 0 low, x/z middle)
  and a Transition between rails where the value changes inside the window.
- VECTOR/TEXT: a band made of two Levels (top and bottom rail) per span, a
  Label with the formatted value left-anchored in the band when the span is at
  least min_label_width pixels wide, and a full-height Transition where the
  value changes inside the window.
"""

from typing import List, Optional, Sequence, Tuple

from .config import RENDERING
from .data_model import (
    ChangePoint, DataFormat, Label, Level, Scalar, Segment, Time, TimeWindow,
    Transition, Value, ValueKind, Vector, WaveformSignal
)
from .value_format import format_value


def calculate_signal_bounds(row_height: int, margin_top: int = RENDERING.SIGNAL_MARGIN_TOP,
                            margin_bottom: int = RENDERING.SIGNAL_MARGIN_BOTTOM) -> Tuple[int, int, int]:
    """Compute the rails inside a row.

    Args:
        row_height: Row height in pixels.
        margin_top: Top inner margin.
        margin_bottom: Bottom inner margin.

    Returns:
        (y_top, y_bottom, y_middle): high rail, low rail and mid rail.
    """
    y_top = margin_top
    y_bottom = row_height - margin_bottom
    y_middle = row_height // 2
    return y_top, y_bottom, y_middle


def time_to_x(t: Time, window: TimeWindow, pixel_width: int) -> int:
    """Map a time inside [window.start, window.end + 1] to a pixel column."""
    return (t - window.start) * pixel_width // window.ticks


def scalar_rail(value: Optional[Value], bounds: Tuple[int, int, int]) -> int:
    """Y coordinate of a single-bit value; undefined and high-impedance sit mid-rail."""
    y_top, y_bottom, y_middle = bounds
    if isinstance(value, Scalar):
        bit = value.bit
    elif isinstance(value, Vector) and len(value.bits) == 1:
        bit = value.bits
    else:
        return y_middle
    if bit == "1":
        return y_top
    if bit == "0":
        return y_bottom
    return y_middle


def _strictly_increasing(changes: Sequence[ChangePoint]) -> bool:
    return all(a.time < b.time for a, b in zip(changes, changes[1:]))


def render(
    changes: Sequence[ChangePoint],
    window: TimeWindow,
    pixel_width: int,
    kind: ValueKind,
    *,
    row_height: int = RENDERING.DEFAULT_ROW_HEIGHT,
    data_format: DataFormat = RENDERING.DEFAULT_DATA_FORMAT,
    end_time: Optional[Time] = None,
    min_label_width: int = RENDERING.MIN_BUS_TEXT_WIDTH
) -> List[Segment]:
    """Compute the segments drawing one signal inside a time window.

    Args:
        changes: Change points in strictly increasing time order.
        window: Visible time range (inclusive ticks).
        pixel_width: Output width in pixels.
        kind: SCALAR for bit-level drawing, VECTOR or TEXT for banded drawing.
        row_height: Height of the signal's row; determines the rails.
        data_format: Label format for vector values.
        end_time: Trace end time bounding the last span, if known.
        min_label_width: Narrowest span, in pixels, that still gets a value label.

    Returns:
        Segments in time order; empty when nothing of the signal is visible.
    """
    if not changes or window.end < window.start or pixel_width < 0:
        return []
    assert _strictly_increasing(changes), "change points must be strictly increasing in time"

    bounds = calculate_signal_bounds(row_height)
    y_top, y_bottom, y_middle = bounds
    banded = kind is not ValueKind.SCALAR
    segments: List[Segment] = []
    last_idx = len(changes) - 1

    for i, a in enumerate(changes):
        if a.time > window.end:
            break  # Later spans start even further right

        next_value: Optional[Value] = None
        if i < last_idx:
            span_end = changes[i + 1].time
            next_value = changes[i + 1].value
        elif end_time is not None:
            span_end = max(end_time, a.time)
        elif a.time >= window.start:
            span_end = window.end + 1
        else:
            continue

        if span_end < window.start:
            continue

        t0 = max(window.start, a.time)
        t1 = min(window.end + 1, span_end)
        x0 = time_to_x(t0, window, pixel_width)
        x1 = time_to_x(t1, window, pixel_width)
        value_changes = (
            next_value is not None and next_value != a.value and span_end <= window.end
        )

        if banded:
            if t1 > t0:
                segments.append(Level(x0, x1, y_top))
                segments.append(Level(x0, x1, y_bottom))
                if x1 - x0 >= max(min_label_width, RENDERING.LABEL_PADDING + 1):
                    segments.append(Label(x0 + RENDERING.LABEL_PADDING, y_middle,
                                          format_value(a.value, data_format)))
            if value_changes:
                segments.append(Transition(x1, y_top, y_bottom))
        else:
            y = scalar_rail(a.value, bounds)
            if t1 > t0:
                segments.append(Level(x0, x1, y))
            if value_changes:
                segments.append(Transition(x1, y, scalar_rail(next_value, bounds)))

    return segments


def render_signal(
    signal: WaveformSignal,
    window: TimeWindow,
    pixel_width: int,
    **kwargs
) -> List[Segment]:
    """render() for a loaded signal, using its own value kind."""
    return render(signal.changes, window, pixel_width, signal.kind, **kwargs)
