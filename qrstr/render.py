"""Renderers: monospace half-block text, ANSI terminal and HTML table."""

import html
from enum import Enum
from typing import Sequence

from qrstr.errors import MisconfiguredEncoderError
from qrstr.grid import PixelGrid
from qrstr.palette import DARK, LIGHT, LOWER, UPPER, WHOLE, Color, Palette
from qrstr.wrap import wrap

ANSI_FRONT = "\033[40;97m"  # black background, bright white foreground
ANSI_RESET = "\033[0m"

CSS = """<style>
.qrstr-white {
	background-color: white;
	color: white;
	border-color: white;
	padding: 0.5em;
}
.qrstr-black {
	background-color: black;
	color: black;
	border-color: black;
	padding: 0.5em;
}
.qrstr-code , .qrstr-code * {
	border: 0;
	padding: 0;
	margin: 0;
	font-size: 10%;
	letter-spacing: 0;
	border-spacing: 0;
	border-collapse: collapse;
}
</style>
"""


class RenderMode(Enum):
    # For dark backgrounds with light text. Needs a monospace font.
    TEXT_DARK = 0
    # For light backgrounds such as paper. Needs a monospace font.
    TEXT_LIGHT = 1
    # A <table>; no font requirement.
    HTML = 2
    # Dark text wrapped in xterm colour escapes.
    TERMINAL = 3


_PALETTES = {
    RenderMode.TEXT_DARK: DARK,
    RenderMode.TEXT_LIGHT: LIGHT,
    RenderMode.HTML: None,
    RenderMode.TERMINAL: DARK,
}


def palette_for(mode: RenderMode) -> Palette | None:
    return _PALETTES[mode]


def _body_rows(palette: Palette, grid: PixelGrid) -> list[str]:
    rows = []
    for y in range(0, grid.height, 2):
        row = []
        for x in range(grid.width):
            # an odd last row is paired with white
            below = grid.at(x, y + 1) if y + 1 < grid.height else Color.WHITE
            row.append(palette.glyph(grid.at(x, y), below))
        rows.append("".join(row))
    return rows


def render_text(palette: Palette | None, grid: PixelGrid | None, headers: Sequence[str] = ()) -> str:
    """Half-block rendering framed by a one-cell border.

    With headers, the wrapped header text sits in a full-block frame above
    a divider and the code body continues the same frame below it.
    """
    if palette is None or grid is None:
        raise MisconfiguredEncoderError()

    dx = grid.width
    wr = palette.whitespace
    lines = []

    if headers:
        lines.append(WHOLE + UPPER * (dx + 2) + WHOLE)
        for text in wrap(dx, headers):
            lines.append(WHOLE + " " + text + " " * (dx + 1 - len(text)) + WHOLE)
        lines.append(WHOLE + LOWER * (dx + 2) + WHOLE)
        lines.append(WHOLE + wr * (dx + 2) + WHOLE)
        left, right = WHOLE + wr, wr + WHOLE
        bottom = wr * (dx + 4)
    else:
        lines.append(wr * (dx + 2))
        left, right = wr, wr
        bottom = wr * (dx + 2)

    lines.extend(left + row + right for row in _body_rows(palette, grid))
    lines.append(bottom)
    return "\n".join(lines) + "\n"


def render_terminal(palette: Palette | None, grid: PixelGrid | None, headers: Sequence[str] = ()) -> str:
    """Text rendering with the colour escape re-applied on every line."""
    s = render_text(palette, grid, headers)
    s = s.replace("\n", ANSI_RESET + "\n" + ANSI_FRONT)
    return ANSI_FRONT + s.removesuffix(ANSI_FRONT)


def render_html(grid: PixelGrid | None, headers: Sequence[str] = ()) -> str:
    """Self-contained <div> holding the headers and a one-cell-per-pixel table.

    Headers are plain text: each becomes one unwrapped <p> with ``<``, ``>``
    and ``&`` escaped, so markup in a header shows literally.
    """
    if grid is None:
        raise MisconfiguredEncoderError()

    out = ['<div style="width: min-content;background: white; color: black;  padding: 1lh;">\n', CSS]
    if headers:
        out.extend(f"<p>{html.escape(text, quote=False)}</p>\n" for text in headers)
        out.append("<hr>\n")

    out.append('<table class="qrstr-code" style="border-collapse: collapse;">\n')
    for y in range(grid.height):
        out.append("<tr>\n")
        for x in range(grid.width):
            cls = "qrstr-black" if grid.at(x, y) is Color.BLACK else "qrstr-white"
            out.append(f'<td class="{cls}"></td>\n')
        out.append("</tr>\n")
    out.append("</table></div>\n")
    return "".join(out)


def render(mode: RenderMode, palette: Palette | None, grid: PixelGrid | None, headers: Sequence[str] = ()) -> str:
    """Render ``grid`` in the given mode."""
    if mode is RenderMode.HTML:
        return render_html(grid, headers)
    if mode is RenderMode.TERMINAL:
        return render_terminal(palette, grid, headers)
    if mode in (RenderMode.TEXT_DARK, RenderMode.TEXT_LIGHT):
        return render_text(palette, grid, headers)
    raise MisconfiguredEncoderError(f"unknown render mode: {mode!r}")
