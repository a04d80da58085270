"""Bit manipulation utilities for inkgrid encoding.

Handles hex parsing and the packing of byte groups into the 3-bit
module codes that become colors.
"""

from __future__ import annotations

from collections.abc import Sequence

# Bits carried by a single module
BITS_PER_MODULE = 3

# A full group: three bytes give exactly eight modules
GROUP_BYTES = 3
MODULES_PER_GROUP = GROUP_BYTES * 8 // BITS_PER_MODULE

MODULE_MASK = (1 << BITS_PER_MODULE) - 1


def hex_to_bytes(hex_string: str) -> bytes:
    """Convert a hex string to bytes.

    Args:
        hex_string: Hex string (e.g. "666f6f"). May have 0x prefix and may
            be empty.

    Returns:
        Decoded bytes.

    Raises:
        ValueError: If hex_string is not valid hex.
    """
    clean = hex_string.strip().removeprefix("0x").removeprefix("0X")
    return bytes.fromhex(clean)


def pack_bytes(chunk: Sequence[int]) -> int:
    """Concatenate bytes into one unsigned integer, most significant byte first.

    Values are masked to 8 bits, so any sequence of ints is accepted.
    """
    value = 0
    for byte in chunk:
        value = (value << 8) | (byte & 0xFF)
    return value


def split_codes(value: int, count: int) -> list[int]:
    """Split the low ``3 * count`` bits of value into 3-bit codes.

    Args:
        value: Packed bit value.
        count: Number of codes to extract.

    Returns:
        List of codes (0-7), most significant group first.
    """
    return [
        (value >> (BITS_PER_MODULE * i)) & MODULE_MASK for i in range(count - 1, -1, -1)
    ]

