"""Glyph palettes for half-block packing.

A terminal cell is about twice as tall as it is wide, so one character
carries two vertically adjacent pixels. The 2-bit code of a pixel pair is
``(top is BLACK) | (bottom is BLACK) << 1``.
"""

from dataclasses import dataclass
from enum import Enum

BLANK = " "
UPPER = "▀"
LOWER = "▄"
WHOLE = "█"


class Color(Enum):
    BLACK = 0
    WHITE = 1


def pair_code(top: Color, bottom: Color) -> int:
    code = 0
    if top is Color.BLACK:
        code |= 1
    if bottom is Color.BLACK:
        code |= 2
    return code


_INVERSE = {BLANK: WHOLE, WHOLE: BLANK, UPPER: LOWER, LOWER: UPPER}


@dataclass(frozen=True)
class Palette:
    """Four glyphs indexed by :func:`pair_code`."""
    name: str
    glyphs: tuple[str, str, str, str]

    def __post_init__(self):
        if len(self.glyphs) != 4:
            raise ValueError(f"palette {self.name!r} needs 4 glyphs, got {len(self.glyphs)}")

    def glyph(self, top: Color, bottom: Color) -> str:
        return self.glyphs[pair_code(top, bottom)]

    @property
    def whitespace(self) -> str:
        """Glyph drawn for a white/white pair; also used for the quiet border."""
        return self.glyph(Color.WHITE, Color.WHITE)

    def inverted(self) -> "Palette":
        """Palette with every block glyph swapped for its complement."""
        name = {"light": "dark", "dark": "light"}.get(self.name, f"{self.name}-inverted")
        return Palette(name, tuple(_INVERSE[g] for g in self.glyphs))


# For light backgrounds (paper, light-mode screens): black pixels are ink.
LIGHT = Palette("light", (BLANK, UPPER, LOWER, WHOLE))
# For dark backgrounds: the glyph is drawn where the pixel is white.
DARK = Palette("dark", (WHOLE, LOWER, UPPER, BLANK))


def lookup(palette: Palette, top: Color, bottom: Color) -> str:
    return palette.glyph(top, bottom)
