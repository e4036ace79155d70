"""WaveSpy - VCD trace ingestion and waveform segment rendering."""

__version__ = "0.1.0"

from .data_model import (
    Scope, Variable, ScopeTree, ValueKind, DataFormat, Scalar, Vector, Text,
    ChangePoint, WaveformSignal, TimeWindow, Level, Transition, Label,
    Timescale, TimeUnit, TraceHeader
)
from .errors import (
    WaveSpyError, TraceIOError, TraceDecodeError, ResolveError, NotFound,
    TypeMismatch, NoTraceLoaded
)
from .scope_tree import build_scope_tree
from .trace_reader import read_header
from .path_resolver import resolve, resolve_index, index_path
from .change_extractor import ChangeStreamExtractor, extract
from .segment_renderer import render, render_signal
from .waveform_model import WaveformModel
from .config import RENDERING, COLORS

__all__ = [
    'Scope', 'Variable', 'ScopeTree', 'ValueKind', 'DataFormat', 'Scalar', 'Vector', 'Text',
    'ChangePoint', 'WaveformSignal', 'TimeWindow', 'Level', 'Transition', 'Label',
    'Timescale', 'TimeUnit', 'TraceHeader',
    'WaveSpyError', 'TraceIOError', 'TraceDecodeError', 'ResolveError', 'NotFound',
    'TypeMismatch', 'NoTraceLoaded',
    'build_scope_tree', 'read_header', 'resolve', 'resolve_index', 'index_path',
    'ChangeStreamExtractor', 'extract', 'render', 'render_signal', 'WaveformModel',
    'RENDERING', 'COLORS'
]
