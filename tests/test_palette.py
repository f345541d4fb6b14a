import pytest

from qrstr.palette import DARK, LIGHT, LOWER, UPPER, WHOLE, Color, Palette, lookup, pair_code

PAIRS = [(top, bottom) for bottom in Color for top in Color]


def test_pair_codes_cover_all_four() -> None:
    assert sorted(pair_code(t, b) for t, b in PAIRS) == [0, 1, 2, 3]


@pytest.mark.parametrize("palette", [LIGHT, DARK])
def test_glyphs_distinct_and_defined(palette: Palette) -> None:
    glyphs = [lookup(palette, t, b) for t, b in PAIRS]
    assert len(set(glyphs)) == 4
    assert all(len(g) == 1 for g in glyphs)


def test_light_lookup() -> None:
    assert LIGHT.glyph(Color.WHITE, Color.WHITE) == " "
    assert LIGHT.glyph(Color.BLACK, Color.WHITE) == UPPER
    assert LIGHT.glyph(Color.WHITE, Color.BLACK) == LOWER
    assert LIGHT.glyph(Color.BLACK, Color.BLACK) == WHOLE


def test_dark_is_inverse_of_light_at_every_code() -> None:
    inverse = {" ": WHOLE, WHOLE: " ", UPPER: LOWER, LOWER: UPPER}
    for code in range(4):
        assert DARK.glyphs[code] == inverse[LIGHT.glyphs[code]]
    assert LIGHT.inverted() == DARK
    assert DARK.inverted() == LIGHT


def test_whitespace_glyph() -> None:
    assert LIGHT.whitespace == " "
    assert DARK.whitespace == WHOLE


def test_palette_needs_four_glyphs() -> None:
    with pytest.raises(ValueError):
        Palette("short", (" ", WHOLE))  # type: ignore[arg-type]


def test_palettes_are_immutable() -> None:
    with pytest.raises(AttributeError):
        LIGHT.glyphs = DARK.glyphs  # type: ignore[misc]
