"""Formatting of signal values for bus labels."""

from .data_model import DataFormat, Scalar, Text, Value, Vector


def format_bits(bits: str, data_format: DataFormat = DataFormat.HEX) -> str:
    """Format a bit vector (MSB first) according to a data format.

    Vectors holding x or z bits cannot be converted to a number and are shown
    as their raw bits in upper case, whatever the format.

    Args:
        bits: Bit string such as "1010" or "10xz"
        data_format: How to interpret fully defined vectors

    Returns:
        The label text, e.g. "0x0A" for "1010" in HEX
    """
    if not bits or not set(bits) <= {"0", "1"}:
        return bits.upper()

    bit_width = len(bits)
    value = int(bits, 2)

    if data_format == DataFormat.UNSIGNED:
        return str(value)

    elif data_format == DataFormat.SIGNED:
        # Signed (2's complement)
        max_val = 1 << (bit_width - 1)
        if value >= max_val:
            value -= (1 << bit_width)
        return str(value)

    elif data_format == DataFormat.HEX:
        # Round up to nearest nibble
        hex_width = (bit_width + 3) // 4
        return f"0x{value:0{hex_width}X}"

    elif data_format == DataFormat.BIN:
        return f"0b{bits}"

    return str(value)


def format_value(value: Value, data_format: DataFormat = DataFormat.HEX) -> str:
    """Label text for any change-point value."""
    if isinstance(value, Vector):
        return format_bits(value.bits, data_format)
    if isinstance(value, Scalar):
        return value.bit.upper()
    if isinstance(value, Text):
        return value.text
    return str(value)
