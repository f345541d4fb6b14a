"""Encoder facade: bind a render mode and error-correction level once, encode many times."""

from dataclasses import dataclass

from qrstr.errors import InvalidConfigurationError, MisconfiguredEncoderError
from qrstr.grid import ErrorCorrectionLevel, generate
from qrstr.logging import audit, get_logger, trace
from qrstr.palette import Palette
from qrstr.render import RenderMode, palette_for, render

log = get_logger("encoder")

DEFAULT_LEVEL = ErrorCorrectionLevel.PERCENT_15


@dataclass(frozen=True)
class Encoder:
    """Immutable encoder; safe to share between threads.

    Build it with :func:`new_encoder`.
    """
    mode: RenderMode
    palette: Palette | None
    level: ErrorCorrectionLevel

    @trace
    def encode(self, data: str, *headers: str) -> str:
        """Encode ``data`` as a QR code rendered in this encoder's mode.

        Headers, if any, are shown above the code. Errors from the QR
        generator (such as data too long for the level) propagate unchanged.
        """
        if not isinstance(self.mode, RenderMode) or not isinstance(self.level, ErrorCorrectionLevel):
            raise MisconfiguredEncoderError()
        if self.mode is not RenderMode.HTML and self.palette is None:
            raise MisconfiguredEncoderError()

        grid = generate(data, self.level)
        output = render(self.mode, self.palette, grid, headers)
        audit("qr.encoded", logger=log,
              mode=self.mode.name, ecc=self.level.letter,
              size=f"{grid.width}x{grid.height}", headers=len(headers))
        return output


def _coerce(enum_cls, value, what: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"invalid {what}: {value!r}")
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidConfigurationError(f"invalid {what}: {value}") from None


def new_encoder(mode: RenderMode | int, level: ErrorCorrectionLevel | int = DEFAULT_LEVEL) -> Encoder:
    """Create an encoder for the given output mode and error-correction level.

    Args:
        mode: A RenderMode, or its integer value (0-3).
        level: An ErrorCorrectionLevel, or its integer value (0-3).
            Higher levels survive more damage but make the code bigger.

    Raises:
        InvalidConfigurationError: mode or level is not one of the known values.
    """
    mode = _coerce(RenderMode, mode, "render mode")
    level = _coerce(ErrorCorrectionLevel, level, "error correction level")
    encoder = Encoder(mode=mode, palette=palette_for(mode), level=level)
    audit("encoder.created", logger=log, mode=mode.name, ecc=level.letter)
    return encoder
