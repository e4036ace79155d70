"""Centralized configuration for WaveSpy.

This module contains the rendering constants and colors used by the segment
renderer and the painter adapter.
"""

from dataclasses import dataclass

from .data_model import DataFormat


@dataclass(frozen=True)
class RenderingConfig:
    """Configuration for signal rendering."""
    SIGNAL_MARGIN_TOP: int = 3
    SIGNAL_MARGIN_BOTTOM: int = 3
    DEFAULT_ROW_HEIGHT: int = 20
    ROW_SPACING: int = 5          # Gap between stacked signal rows
    LABEL_PADDING: int = 3        # Offset of bus labels from the span's left edge
    MIN_BUS_TEXT_WIDTH: int = 30  # Narrower bus spans get no label
    DEFAULT_DATA_FORMAT: DataFormat = DataFormat.HEX

    # Font settings
    FONT_FAMILY: str = "Consolas"
    FONT_SIZE_SMALL: int = 8


@dataclass(frozen=True)
class ColorScheme:
    """Color scheme for painted waveforms."""
    DEFAULT_SIGNAL: str = "#33C3F0"
    LABEL_TEXT: str = "#cccccc"


# Global instances for easy access
RENDERING = RenderingConfig()
COLORS = ColorScheme()
