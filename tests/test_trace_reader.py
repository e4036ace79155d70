"""Tests for VCD header decoding and body event replay."""

import logging

import pytest
from vcd.reader import TokenKind

from wavespy.data_model import Timescale, TimeUnit
from wavespy.errors import TraceDecodeError, TraceIOError, WaveSpyError
from wavespy.trace_reader import iter_events, open_trace, read_header
from .test_utils import vcd_text


def test_header_metadata(alu_vcd):
    header = read_header(alu_vcd)

    assert header.timescale == Timescale(1, TimeUnit.NANOSECONDS)
    assert header.date == "Mon Oct 19 09:30:00 2026"
    assert header.version == "alu testbench"
    assert header.comments == ["4-bit adder with carry"]
    assert len(header.tree) == 8


def test_header_logs_summary(alu_vcd, caplog):
    with caplog.at_level(logging.INFO, logger="wavespy.trace_reader"):
        read_header(alu_vcd)
    assert "8 variables" in caplog.text


def test_timescale_units(write_vcd):
    header = read_header(write_vcd(vcd_text("$var wire 1 ! clk $end", timescale="10 us")))
    assert header.timescale == Timescale(10, TimeUnit.MICROSECONDS)


def test_missing_file(tmp_path):
    missing = str(tmp_path / "nope.vcd")
    with pytest.raises(TraceIOError) as exc_info:
        read_header(missing)

    assert exc_info.value.path == missing
    assert isinstance(exc_info.value, OSError)
    assert isinstance(exc_info.value, WaveSpyError)


def test_events_follow_header(alu_vcd):
    with open_trace(alu_vcd) as stream:
        events = list(iter_events(stream, alu_vcd))

    kinds = {token.kind for token in events}
    assert kinds == {
        TokenKind.CHANGE_TIME, TokenKind.CHANGE_SCALAR,
        TokenKind.CHANGE_VECTOR, TokenKind.CHANGE_REAL,
    }
    times = [token.data for token in events if token.kind is TokenKind.CHANGE_TIME]
    assert times == [0, 10, 20, 30, 40, 50, 60]


def test_stream_closed_after_pass(alu_vcd):
    with open_trace(alu_vcd) as stream:
        list(iter_events(stream, alu_vcd))
    assert stream.closed


def test_malformed_body_raises_decode_error(write_vcd):
    path = write_vcd(vcd_text("$var wire 1 ! clk $end", "#0\n0!\n@garbage\n"))

    with pytest.raises(TraceDecodeError) as exc_info:
        with open_trace(path) as stream:
            list(iter_events(stream, path))
    assert exc_info.value.path == path
