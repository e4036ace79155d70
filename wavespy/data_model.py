"""Core data structures for WaveSpy.

This module defines the immutable pieces the engine passes around: the scope
hierarchy decoded from a VCD header, the values and change points extracted
from the value-change body, loaded waveform signals, and the geometric
segments produced by the renderer.

Don't confuse the ScopeTree (everything the file declares) with the
WaveformModel (only the signals the user chose to display).

    ScopeTree
    └── root: Scope(kind="root", name="")      (synthetic, always present)
        ├── Scope(kind="module", name="tb")
        │   ├── Variable(kind="wire", width=1, identifier="!", name="clk")
        │   └── Scope(kind="module", name="instance")
        │       ├── Variable(kind="wire", width=1, identifier="#", name="cin")
        │       └── Variable(kind="reg", width=8, identifier="$", name="sum")
        └── Variable(...)                       (unscoped variables land here)

"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union, Iterator
from enum import Enum

Time = int  # Simulation ticks in Timescale units

# IdentifierCode is the short code the VCD header assigns to a variable ("!", "#", "%a").
# Value changes in the body refer to variables only through it. It is stable within one
# decode session of one file; several variables may share a code (aliases).
IdentifierCode = str

# Variable kinds whose values are rendered as text rather than bits
TEXT_VAR_KINDS = frozenset({"real", "realtime", "shortreal", "string"})

ROOT_SCOPE_KIND = "root"

# Trailing bit-select of a $var reference: "data[0]", "a[3:0]"
_BIT_SELECT = re.compile(r"\[\d+(?::\d+)?\]$")


class ValueKind(Enum):
    """Rendering discriminant of a signal's values."""
    SCALAR = "scalar"   # Single bit: 0, 1, x, z
    VECTOR = "vector"   # Fixed-width bit vector
    TEXT = "text"       # Real or string valued


class DataFormat(Enum):
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    HEX = "hex"
    BIN = "bin"


@dataclass(frozen=True)
class Scalar:
    bit: str  # One of "0", "1", "x", "z"


@dataclass(frozen=True)
class Vector:
    bits: str  # MSB first, may contain "x"/"z"


@dataclass(frozen=True)
class Text:
    text: str


Value = Union[Scalar, Vector, Text]


@dataclass(frozen=True)
class ChangePoint:
    """A recorded (time, value) pair marking when a variable's value changed."""
    time: Time
    value: Value


@dataclass(frozen=True)
class Variable:
    """A named, typed, fixed-width signal leaf declared by a $var command."""
    kind: str                    # VCD var type, e.g. "wire", "reg", "real"
    width: int
    identifier: IdentifierCode
    name: str                    # Reference including any bit-select, e.g. "data[0]"

    @property
    def reference(self) -> str:
        """Name without its bit-select suffix."""
        return _BIT_SELECT.sub("", self.name)

    @property
    def value_kind(self) -> ValueKind:
        if self.kind in TEXT_VAR_KINDS:
            return ValueKind.TEXT
        if self.width == 1:
            return ValueKind.SCALAR
        return ValueKind.VECTOR


@dataclass(frozen=True)
class Scope:
    """A named grouping node (module, task, function, begin, fork)."""
    kind: str
    name: str
    children: Tuple["ScopeItem", ...] = ()

    def scopes(self) -> List["Scope"]:
        """Scope children in declaration order."""
        return [item for item in self.children if isinstance(item, Scope)]

    def variables(self) -> List[Variable]:
        """Variable children in declaration order."""
        return [item for item in self.children if isinstance(item, Variable)]

    def child_scope(self, name: str) -> Optional["Scope"]:
        for item in self.children:
            if isinstance(item, Scope) and item.name == name:
                return item
        return None

    def child_variable(self, name: str) -> Optional[Variable]:
        """Variable child matching a full name, or a bit-select-free reference.

        "a" finds a variable declared as "a[3:0]" as long as it is the only
        variable with that reference; bit-blasted siblings ("data[0]",
        "data[1]") can only be reached by their full names.
        """
        by_reference = []
        for item in self.children:
            if isinstance(item, Variable):
                if item.name == name:
                    return item
                if item.reference == name:
                    by_reference.append(item)
        return by_reference[0] if len(by_reference) == 1 else None


ScopeItem = Union[Scope, Variable]


class ScopeTree:
    """Immutable scope hierarchy of one decoded trace under a synthetic root."""

    def __init__(self, root: Scope) -> None:
        self.root = root

    def walk(self) -> Iterator[Tuple[Tuple[str, ...], Variable]]:
        """Yield (path, variable) pairs depth-first in declaration order.

        The path excludes the synthetic root and ends with the variable name.
        """
        def visit(prefix: Tuple[str, ...], scope: Scope) -> Iterator[Tuple[Tuple[str, ...], Variable]]:
            for item in scope.children:
                if isinstance(item, Variable):
                    yield prefix + (item.name,), item
                else:
                    yield from visit(prefix + (item.name,), item)

        yield from visit((), self.root)

    def identifiers(self) -> List[IdentifierCode]:
        """Unique identifier codes in first-declaration order."""
        seen = {}
        for _, var in self.walk():
            seen.setdefault(var.identifier, None)
        return list(seen)

    def variables_for(self, identifier: IdentifierCode) -> List[Tuple[Tuple[str, ...], Variable]]:
        """All (path, variable) pairs sharing an identifier code (aliases)."""
        return [(path, var) for path, var in self.walk() if var.identifier == identifier]

    def __len__(self) -> int:
        return sum(1 for _ in self.walk())

    def __repr__(self) -> str:
        return f"ScopeTree(scopes={len(self.root.scopes())}, variables={len(self)})"


@dataclass(frozen=True)
class WaveformSignal:
    """A loaded signal: display metadata plus its extracted change points."""
    display_name: str
    path: Tuple[str, ...]
    identifier: IdentifierCode
    kind: ValueKind
    width: int
    changes: Tuple[ChangePoint, ...] = ()

    @property
    def full_name(self) -> str:
        return ".".join(self.path)


@dataclass(frozen=True)
class TimeWindow:
    """Visible time range; both ends are inclusive ticks."""
    start: Time
    end: Time

    @property
    def ticks(self) -> int:
        """Number of ticks covered (the +1 keeps zero-width windows drawable)."""
        return self.end - self.start + 1


# Renderer output. Pure geometry relative to the signal's row, no styling.

@dataclass(frozen=True)
class Level:
    x0: int
    x1: int
    y: int


@dataclass(frozen=True)
class Transition:
    x: int
    y0: int
    y1: int


@dataclass(frozen=True)
class Label:
    x: int
    y: int
    text: str


Segment = Union[Level, Transition, Label]


class TimeUnit(Enum):
    FEMTOSECONDS = "fs"  # 10^-15 seconds
    PICOSECONDS = "ps"   # 10^-12 seconds
    NANOSECONDS = "ns"   # 10^-9 seconds
    MICROSECONDS = "μs"  # 10^-6 seconds
    MILLISECONDS = "ms"  # 10^-3 seconds
    SECONDS = "s"        # 10^0 seconds

    @classmethod
    def from_string(cls, s: str) -> Optional['TimeUnit']:
        """Convert string representation to TimeUnit."""
        mapping = {
            'fs': cls.FEMTOSECONDS,
            'ps': cls.PICOSECONDS,
            'ns': cls.NANOSECONDS,
            'us': cls.MICROSECONDS,  # Note: VCD headers use 'us' not 'μs'
            'μs': cls.MICROSECONDS,
            'ms': cls.MILLISECONDS,
            's': cls.SECONDS
        }
        return mapping.get(s)


@dataclass
class Timescale:
    """Represents the timescale of a waveform file."""
    factor: int  # The numeric factor (1, 10, 100)
    unit: TimeUnit  # The time unit


@dataclass
class TraceHeader:
    """Everything decoded from a VCD header up to $enddefinitions."""
    tree: ScopeTree
    timescale: Optional[Timescale] = None
    date: str = ""
    version: str = ""
    comments: List[str] = field(default_factory=list)
