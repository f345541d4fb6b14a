"""PixelGrid and the qrcode-backed matrix generator."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import qrcode
import qrcode.constants
from PIL import Image

from qrstr.logging import audit, get_logger, trace
from qrstr.palette import Color

log = get_logger("grid")


class ErrorCorrectionLevel(Enum):
    PERCENT_7 = 0   # L
    PERCENT_15 = 1  # M
    PERCENT_25 = 2  # Q
    PERCENT_30 = 3  # H

    @property
    def qrcode_constant(self) -> int:
        return _QRCODE_LEVELS[self]

    @property
    def letter(self) -> str:
        return "LMQH"[self.value]


_QRCODE_LEVELS = {
    ErrorCorrectionLevel.PERCENT_7: qrcode.constants.ERROR_CORRECT_L,
    ErrorCorrectionLevel.PERCENT_15: qrcode.constants.ERROR_CORRECT_M,
    ErrorCorrectionLevel.PERCENT_25: qrcode.constants.ERROR_CORRECT_Q,
    ErrorCorrectionLevel.PERCENT_30: qrcode.constants.ERROR_CORRECT_H,
}

ECC_NAMES = {level.letter: level for level in ErrorCorrectionLevel}


@dataclass(frozen=True)
class PixelGrid:
    """Read-only bilevel image; origin top-left, x right, y down."""
    rows: tuple[tuple[Color, ...], ...]

    def __post_init__(self):
        if not self.rows or not self.rows[0]:
            raise ValueError("pixel grid must be at least 1x1")
        width = len(self.rows[0])
        if any(len(row) != width for row in self.rows):
            raise ValueError("pixel grid rows must all have the same width")

    @classmethod
    def from_modules(cls, modules: Sequence[Sequence[bool]]) -> "PixelGrid":
        """Build from a module matrix where truthy means black."""
        return cls(tuple(
            tuple(Color.BLACK if m else Color.WHITE for m in row)
            for row in modules
        ))

    @classmethod
    def from_image(cls, image: Image.Image, module_size: int = 1, threshold: int = 128) -> "PixelGrid":
        """Sample a rendered QR bitmap, one pixel from the centre of each module.

        Transparent pixels count as white. Pixels darker than ``threshold``
        (8-bit luminance) are black.
        """
        if module_size < 1:
            raise ValueError(f"module_size must be >= 1, got {module_size}")
        if image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info:
            rgba = image.convert("RGBA")
            image = Image.alpha_composite(Image.new("RGBA", rgba.size, (255, 255, 255, 255)), rgba)
        gray = image.convert("L")
        dx = gray.width // module_size
        dy = gray.height // module_size
        half = module_size // 2
        return cls(tuple(
            tuple(
                Color.BLACK
                if gray.getpixel((x * module_size + half, y * module_size + half)) < threshold
                else Color.WHITE
                for x in range(dx)
            )
            for y in range(dy)
        ))

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def at(self, x: int, y: int) -> Color:
        return self.rows[y][x]

    def black_count(self) -> int:
        return sum(row.count(Color.BLACK) for row in self.rows)


@trace
def generate(data: str | bytes, level: ErrorCorrectionLevel = ErrorCorrectionLevel.PERCENT_15) -> PixelGrid:
    """Encode ``data`` into the smallest QR symbol that fits at ``level``.

    The symbol has no quiet zone; renderers add their own border. Errors
    from ``qrcode`` propagate unchanged: overflow is ``DataOverflowError`` on
    qrcode 7 and ``ValueError`` on qrcode 8.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=level.qrcode_constant,
        box_size=1,
        border=0,
    )
    qr.add_data(data)
    qr.make(fit=True)
    grid = PixelGrid.from_modules(qr.get_matrix())

    audit("qr.generated", logger=log,
          version=qr.version, size=f"{grid.width}x{grid.height}",
          ecc=level.letter, data_len=len(data))
    return grid
