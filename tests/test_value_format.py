"""Tests for bus label formatting."""

import pytest

from wavespy.data_model import DataFormat, Scalar, Text, Vector
from wavespy.value_format import format_bits, format_value


@pytest.mark.parametrize("bits,data_format,expected", [
    ("1010", DataFormat.HEX, "0xA"),
    ("00000", DataFormat.HEX, "0x00"),
    ("10001", DataFormat.HEX, "0x11"),
    ("1010", DataFormat.BIN, "0b1010"),
    ("1010", DataFormat.UNSIGNED, "10"),
    ("1010", DataFormat.SIGNED, "-6"),
    ("0111", DataFormat.SIGNED, "7"),
])
def test_format_bits(bits, data_format, expected):
    assert format_bits(bits, data_format) == expected


@pytest.mark.parametrize("data_format", list(DataFormat))
def test_undefined_bits_shown_raw(data_format):
    assert format_bits("xx01", data_format) == "XX01"
    assert format_bits("z", data_format) == "Z"


def test_format_value_kinds():
    assert format_value(Vector("1111")) == "0xF"
    assert format_value(Scalar("x")) == "X"
    assert format_value(Text("1.25")) == "1.25"
