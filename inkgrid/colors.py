"""CMY color palette for inkgrid modules.

Each module in a printed grid is a combination of the three printer
inks: cyan, magenta, and yellow. With one bit per ink that gives eight
colors. An absence of all three is simply white paper, and the presence
of all three is printed as black.

The naming convention used throughout is:

    CMY | name
    ----|--------
    000 | white
    100 | cyan
    010 | magenta
    110 | violet
    001 | yellow
    101 | green
    011 | orange
    111 | black

The exact shade varies by printer; renderers use the additive
complement of the inks (see ``Color.rgb``) unless told otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass

# Bit positions within a 3-bit module code
CYAN_BIT = 0x4
MAGENTA_BIT = 0x2
YELLOW_BIT = 0x1


@dataclass(frozen=True)
class Color:
    """A three-ink CMY color.

    Attributes:
        cyan: Cyan ink present.
        magenta: Magenta ink present.
        yellow: Yellow ink present.
    """

    cyan: bool
    magenta: bool
    yellow: bool

    @classmethod
    def from_code(cls, code: int) -> Color:
        """Build a color from a 3-bit code (cyan is the high bit)."""
        return cls(
            cyan=(code & CYAN_BIT) != 0,
            magenta=(code & MAGENTA_BIT) != 0,
            yellow=(code & YELLOW_BIT) != 0,
        )

    @property
    def code(self) -> int:
        """The 3-bit code for this color."""
        return (
            (CYAN_BIT if self.cyan else 0)
            | (MAGENTA_BIT if self.magenta else 0)
            | (YELLOW_BIT if self.yellow else 0)
        )

    @property
    def name(self) -> str:
        return COLOR_NAMES[self.code]

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Screen approximation: each ink absorbs its complementary primary."""
        return (
            0 if self.cyan else 255,
            0 if self.magenta else 255,
            0 if self.yellow else 255,
        )

    @property
    def hex(self) -> str:
        r, g, b = self.rgb
        return f"#{r:02X}{g:02X}{b:02X}"


WHITE = Color(False, False, False)
CYAN = Color(True, False, False)
MAGENTA = Color(False, True, False)
VIOLET = Color(True, True, False)
YELLOW = Color(False, False, True)
GREEN = Color(True, False, True)
ORANGE = Color(False, True, True)
BLACK = Color(True, True, True)

NO_INK = WHITE
FULL_INK = BLACK

# Indexed by 3-bit code
PALETTE: list[Color] = [Color.from_code(code) for code in range(8)]

COLOR_NAMES: dict[int, str] = {
    WHITE.code: "white",
    CYAN.code: "cyan",
    MAGENTA.code: "magenta",
    VIOLET.code: "violet",
    YELLOW.code: "yellow",
    GREEN.code: "green",
    ORANGE.code: "orange",
    BLACK.code: "black",
}

COLOR_BY_NAME: dict[str, Color] = {name: PALETTE[code] for code, name in COLOR_NAMES.items()}


def color_by_name(name: str) -> Color:
    """Look up a palette color by name.

    Args:
        name: Color name (case-insensitive), e.g. "violet".

    Returns:
        The matching Color.

    Raises:
        ValueError: If the name is not one of the eight palette names.
    """
    key = name.strip().lower()
    if key not in COLOR_BY_NAME:
        valid = ", ".join(COLOR_BY_NAME.keys())
        raise ValueError(f"Unknown color '{name}'. Valid colors: {valid}")
    return COLOR_BY_NAME[key]
