"""
Shared grids and reference walks for the patrol tests.
"""
from __future__ import annotations

import numpy as np
import pytest

from patrol.grid import DELTAS, Coord, Direction

EXAMPLE = """\
....#.....
.........#
..........
..#.......
.......#..
..........
.#..^.....
........#.
#.........
......#...
"""

# Guard at (1,1) walks a closed rectangle between four obstructions.
RECTANGLE = """\
.#....
.^...#
#.....
....#.
"""


def _naive_patrol(obstructed: np.ndarray, start: Coord) -> tuple[int, bool]:
    """Reference walk on the raw mask: (distinct cells, loops)."""
    rows, cols = obstructed.shape
    r, c, d = start.row, start.col, int(Direction.NORTH)
    seen = {(r, c, d)}
    cells = {(r, c)}
    while True:
        dr, dc = DELTAS[d]
        nr, nc = r + dr, c + dc
        if not (0 <= nr < rows and 0 <= nc < cols):
            return len(cells), False
        if obstructed[nr, nc]:
            d = (d + 1) % 4
        else:
            r, c = nr, nc
        if (r, c, d) in seen:
            return len(cells), True
        seen.add((r, c, d))
        cells.add((r, c))


def _random_lab(rng: np.random.Generator, rows: int, cols: int, density: float) -> tuple[np.ndarray, Coord]:
    mask = rng.random((rows, cols)) < density
    free = np.argwhere(~mask)
    r, c = free[rng.integers(len(free))]
    return mask, Coord(int(r), int(c))


@pytest.fixture
def example_text() -> str:
    return EXAMPLE


@pytest.fixture
def rectangle_text() -> str:
    return RECTANGLE


@pytest.fixture
def naive_patrol():
    return _naive_patrol


@pytest.fixture
def random_lab():
    return _random_lab
