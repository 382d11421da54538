"""
Byte inspector for hex literals.

Projects a string of hex digits onto per-byte rows (bits, hex, decimal), the
way CHAR patterns and other hex data are usually read on the TI-99/4A.
"""

from __future__ import annotations

from string import hexdigits

from .ir import ByteRow

DEFAULT_PREFIX = "0x"


def render_byte(digits: str, prefix: str = DEFAULT_PREFIX) -> ByteRow:
    """
    Render one byte, or a lone nibble, of hex digits.

    Args:
        digits: One or two hex digits
        prefix: Prefix for the hex text

    Returns:
        ByteRow with 4 bits for a nibble, 8 for a full byte

    Raises:
        ValueError: If digits are not one or two hex digits
    """
    if not 1 <= len(digits) <= 2 or not all(c in hexdigits for c in digits):
        raise ValueError(f"Expected one or two hex digits, got {digits!r}")
    value = int(digits, 16)
    width = 4 * len(digits)
    binary = format(value, f"0{width}b")
    return ByteRow(
        bits=tuple(bit == "1" for bit in binary),
        hex=f"{prefix}{digits}",
        value=value,
    )


def render_bytes(hex_digits: str, prefix: str = DEFAULT_PREFIX) -> list[ByteRow]:
    """
    Render a hex string as byte rows.

    An odd trailing digit is a lone nibble and renders as a 4-bit row.

    Raises:
        ValueError: If hex_digits contains anything but hex digits
    """
    return [
        render_byte(hex_digits[start : start + 2], prefix)
        for start in range(0, len(hex_digits), 2)
    ]
