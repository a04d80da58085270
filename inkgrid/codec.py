"""Byte-to-color codec for inkgrid.

Converts input data to a stream of CMY colors suitable for printing
on a page.

Bytes are read three at a time. The three bytes are concatenated into
a 24-bit value and masked into eight consecutive groups of three bits,
each of which becomes one color:

    01100110 01101111 01101111
    AAABBBCC CDDDEEEF FFGGGHHH
    cmy

e.g. the fourth most significant bit in the second byte controls the
yellow channel of color D. For the example above the colors are
[orange yellow cyan violet black green green black].

Each module carries 3 bits, so two modules represent a single base 64
character.

Termination:
When fewer than three bytes remain, the leftovers are zero-padded up to
a whole number of modules and a two-module termination symbol follows:

1. a single black module, and
2. a module whose color indicates the number of padding bits.

    remaining | padding | data modules | indicator
    ----------|---------|--------------|----------
    0 bytes   | 0       | 0            | white
    1 byte    | 1       | 3            | yellow
    2 bytes   | 2       | 6            | orange

A reader takes the input to end immediately before the last black module
that is followed by a valid indicator.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Sequence

import structlog

from .bits import GROUP_BYTES, MODULES_PER_GROUP, pack_bytes, split_codes
from .colors import BLACK, ORANGE, WHITE, YELLOW, Color

logger = structlog.get_logger(__name__)

# Data modules produced by a trailing group, keyed by padding bits
_TRAILING_MODULES = {0: 0, 1: 3, 2: 6}

_INDICATOR_PADDING = {WHITE: 0, YELLOW: 1, ORANGE: 2}


def codes_to_colors(codes: Sequence[int]) -> list[Color]:
    """Map 3-bit codes to colors, preserving order."""
    return [Color.from_code(code) for code in codes]


def padding_indicator(padding: int) -> Color:
    """Color of the termination indicator module for a padding-bit count."""
    return Color(cyan=False, magenta=padding >= 2, yellow=padding >= 1)


def padding_from_indicator(color: Color) -> int:
    """Recover the padding-bit count from an indicator module.

    Raises:
        ValueError: If color is not a termination indicator
            (white, yellow, or orange).
    """
    try:
        return _INDICATOR_PADDING[color]
    except KeyError:
        raise ValueError(f"{color.name} is not a padding indicator color") from None


def terminate(remaining: Sequence[int]) -> list[Color]:
    """Convert the last (fewer than three) bytes and attach the termination symbol.

    Args:
        remaining: The trailing bytes that do not fill a whole group.

    Returns:
        The padded data colors followed by [black, indicator].
    """
    count = len(remaining)
    if count == 2:
        bits, padding = pack_bytes(remaining) << 2, 2
    elif count == 1:
        bits, padding = pack_bytes(remaining) << 1, 1
    else:
        # Nothing left, or a longer sequence handed over to cut the stream short
        if count:
            logger.warning("stream_truncated", dropped_bytes=count)
        bits, padding = 0, 0

    colors = codes_to_colors(split_codes(bits, _TRAILING_MODULES[padding]))
    colors.append(BLACK)
    colors.append(padding_indicator(padding))
    return colors


def encoded_length(byte_count: int) -> int:
    """Number of colors ``encode`` produces for byte_count input bytes."""
    groups, leftover = divmod(byte_count, GROUP_BYTES)
    return groups * MODULES_PER_GROUP + _TRAILING_MODULES[leftover] + 2


class ColorStream(Iterator[Color]):
    """Lazy, forward-only stream of colors for a byte sequence.

    Colors are produced one group of eight at a time, only when the
    consumer pulls past the previous group. The stream cannot be
    restarted; call ``encode`` again to re-read the data.
    """

    def __init__(self, data: Sequence[int]):
        self._data = data
        self._position = 0
        self._pending: deque[Color] = deque()
        self._terminated = False

    @property
    def position(self) -> int:
        """Index of the first input byte not yet converted."""
        return self._position

    @property
    def exhausted(self) -> bool:
        return self._terminated and not self._pending

    def __iter__(self) -> ColorStream:
        return self

    def __next__(self) -> Color:
        if not self._pending:
            self._advance()
        if not self._pending:
            raise StopIteration
        return self._pending.popleft()

    def _advance(self) -> None:
        if self._terminated:
            return

        start = self._position
        if len(self._data) - start >= GROUP_BYTES:
            group = self._data[start : start + GROUP_BYTES]
            self._pending.extend(codes_to_colors(split_codes(pack_bytes(group), MODULES_PER_GROUP)))
            self._position = start + GROUP_BYTES
        else:
            self._pending.extend(terminate(self._data[start:]))
            self._position = len(self._data)
            self._terminated = True


def encode(data: Sequence[int]) -> ColorStream:
    """Encode bytes into a lazily produced, terminated color stream.

    Args:
        data: Input bytes. Any sequence of ints is accepted; each value
            is masked to 8 bits.

    Returns:
        ColorStream ending in the [black, indicator] termination symbol.
    """
    logger.debug(
        "encoding_colors",
        byte_count=len(data),
        color_count=encoded_length(len(data)),
    )
    return ColorStream(data)
