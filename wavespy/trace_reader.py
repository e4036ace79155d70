"""VCD trace reading on top of the pyvcd tokenizer.

The reader owns every interaction with the file system and the decoder:

- open_trace() is the scoped read handle; it is closed when the with-block
  ends, whether the pass completed or failed.
- iter_tokens() runs vcd.reader.tokenize() and translates decoder failures
  into TraceDecodeError, and read failures into TraceIOError.
- read_header() decodes everything up to $enddefinitions into a TraceHeader.
- iter_events() replays the body: timestamp and value-change tokens only.
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import BinaryIO, Iterator, List, Optional

from vcd.reader import Token, TokenKind, VCDParseError, tokenize

from .data_model import Timescale, TimeUnit, TraceHeader
from .errors import TraceDecodeError, TraceIOError
from .scope_tree import build_scope_tree, kind_name

logger = logging.getLogger(__name__)

# Token kinds that make up the replayable event stream after the header
EVENT_KINDS = frozenset({
    TokenKind.CHANGE_TIME,
    TokenKind.CHANGE_SCALAR,
    TokenKind.CHANGE_VECTOR,
    TokenKind.CHANGE_REAL,
    TokenKind.CHANGE_STRING,
})


@contextmanager
def open_trace(path: str) -> Iterator[BinaryIO]:
    """Open a trace file for one sequential pass."""
    try:
        stream = open(path, "rb")
    except OSError as e:
        raise TraceIOError(path, e.strerror or str(e)) from e
    with stream:
        yield stream


def iter_tokens(stream: BinaryIO, path: str) -> Iterator[Token]:
    """Tokenize a whole trace, mapping decoder and read errors."""
    try:
        yield from tokenize(stream)
    except VCDParseError as e:
        raise TraceDecodeError(path, str(e)) from e
    except OSError as e:
        raise TraceIOError(path, e.strerror or str(e)) from e


def iter_events(stream: BinaryIO, path: str) -> Iterator[Token]:
    """Yield timestamp and value-change tokens following $enddefinitions."""
    in_header = True
    for token in iter_tokens(stream, path):
        if in_header:
            if token.kind is TokenKind.ENDDEFINITIONS:
                in_header = False
            continue
        if token.kind in EVENT_KINDS:
            yield token


def parse_timescale(decl: object) -> Optional[Timescale]:
    """Convert a pyvcd TimescaleDecl to a Timescale, None if the unit is unknown."""
    unit = TimeUnit.from_string(kind_name(getattr(decl, "unit", "")))
    if unit is None:
        return None
    return Timescale(factor=int(kind_name(getattr(decl, "magnitude", 1))), unit=unit)


def read_header(path: str) -> TraceHeader:
    """Decode the header of a trace file.

    Raises:
        TraceIOError: if the file cannot be opened or read
        TraceDecodeError: if the header is malformed
    """
    start_time = time.time()
    header_tokens: List[Token] = []
    with open_trace(path) as stream:
        for token in iter_tokens(stream, path):
            header_tokens.append(token)
            if token.kind is TokenKind.ENDDEFINITIONS:
                break

    header = TraceHeader(tree=build_scope_tree(header_tokens))
    for token in header_tokens:
        if token.kind is TokenKind.TIMESCALE:
            header.timescale = parse_timescale(token.data)
        elif token.kind is TokenKind.DATE:
            header.date = str(token.data).strip()
        elif token.kind is TokenKind.VERSION:
            header.version = str(token.data).strip()
        elif token.kind is TokenKind.COMMENT:
            header.comments.append(str(token.data).strip())

    file_size_mb = os.path.getsize(path) / (1024 * 1024)
    logger.info(
        f"Read header of {os.path.basename(path)} ({file_size_mb:.1f} MB): "
        f"{len(header.tree)} variables in {time.time() - start_time:.2f} seconds"
    )
    return header
