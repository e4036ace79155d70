"""Stroke renderer segments onto a QPainter.

The segment renderer produces backend-independent geometry relative to a
signal row. This module is the thin adapter that places rows on a painting
surface (widget, QImage, QPixmap) and draws the primitives with cosmetic pens.
"""

from typing import Optional, Sequence

from PySide6.QtGui import QPainter, QPen, QColor, QFont

from .config import RENDERING, COLORS
from .data_model import Label, Level, Segment, Time, TimeWindow, Transition, WaveformSignal
from .segment_renderer import render_signal


def row_top(row: int, row_height: int = RENDERING.DEFAULT_ROW_HEIGHT,
            spacing: int = RENDERING.ROW_SPACING) -> int:
    """Y coordinate of the top of a signal row."""
    return row * (row_height + spacing)


def paint_segments(painter: QPainter, segments: Sequence[Segment], x: int = 0, y: int = 0,
                   color: Optional[str] = None) -> None:
    """Draw one row of segments with its origin at (x, y).

    Args:
        painter: Active QPainter to draw into.
        segments: Output of segment_renderer.render().
        x: Left edge of the waveform area in pixels.
        y: Top of the signal's row in pixels.
        color: Line color, theme default when None.
    """
    line_color = QColor(color or COLORS.DEFAULT_SIGNAL)
    pen = QPen(line_color)
    pen.setWidth(0)  # cosmetic 1 device-pixel for crisp HiDPI lines
    painter.setPen(pen)

    labels = []
    for segment in segments:
        if isinstance(segment, Level):
            painter.drawLine(x + segment.x0, y + segment.y, x + segment.x1, y + segment.y)
        elif isinstance(segment, Transition):
            painter.drawLine(x + segment.x, y + segment.y0, x + segment.x, y + segment.y1)
        elif isinstance(segment, Label):
            labels.append(segment)

    if not labels:
        return

    # Labels go on top of the band lines
    painter.setFont(QFont(RENDERING.FONT_FAMILY, RENDERING.FONT_SIZE_SMALL))
    painter.setPen(QColor(COLORS.LABEL_TEXT))
    fm = painter.fontMetrics()
    baseline_offset = (fm.ascent() - fm.descent()) // 2
    for label in labels:
        painter.drawText(x + label.x, y + label.y + baseline_offset, label.text)


def paint_signals(painter: QPainter, signals: Sequence[WaveformSignal], window: TimeWindow,
                  pixel_width: int, x: int = 0, y: int = 0,
                  row_height: int = RENDERING.DEFAULT_ROW_HEIGHT,
                  end_time: Optional[Time] = None) -> None:
    """Render and paint every signal, one row each, in display order."""
    for row, signal in enumerate(signals):
        segments = render_signal(signal, window, pixel_width, row_height=row_height, end_time=end_time)
        paint_segments(painter, segments, x, y + row_top(row, row_height))
