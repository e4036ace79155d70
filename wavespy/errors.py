"""Exception hierarchy for trace loading, path resolution and the waveform model."""

from typing import Sequence


class WaveSpyError(Exception):
    """Base class for all errors raised by wavespy."""


class TraceIOError(WaveSpyError, OSError):
    """The trace file could not be opened or read."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class TraceDecodeError(WaveSpyError):
    """The decoder reported malformed trace data."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class ResolveError(WaveSpyError):
    """A signal path could not be resolved to a variable."""


class NotFound(ResolveError):
    """No variable exists at the requested path."""

    def __init__(self, path: Sequence[object], message: str = "signal not found") -> None:
        self.path = tuple(path)
        shown = ".".join(str(part) for part in self.path) or "<empty path>"
        super().__init__(f"{message}: {shown}")


class TypeMismatch(NotFound):
    """A path segment names a variable where a scope is expected, or vice versa."""


class NoTraceLoaded(WaveSpyError):
    """The operation needs an open trace."""
