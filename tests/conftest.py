import logging
from typing import Callable

import pytest

from qrstr.grid import PixelGrid


def grid_from(*rows: str) -> PixelGrid:
    """Build a grid from strings where '#' is black and anything else white."""
    return PixelGrid.from_modules([[c == "#" for c in row] for row in rows])


@pytest.fixture
def make_grid() -> Callable[..., PixelGrid]:
    return grid_from


@pytest.fixture(autouse=True)
def _restore_qrstr_logger():
    root = logging.getLogger("qrstr")
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
