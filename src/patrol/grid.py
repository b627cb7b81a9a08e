"""
Grid coordinates and the four patrol directions.

Conventions:
  - Coordinates are (row, col) with row 0 at the top of the map.
  - North decreases row, East increases col.
  - A Coord may be negative or past the edge; callers check `in_bounds`
    before indexing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class Coord:
    """Signed (row, col) pair."""

    row: int
    col: int

    def __add__(self, other: Coord) -> Coord:
        return Coord(self.row + other.row, self.col + other.col)

    def __sub__(self, other: Coord) -> Coord:
        return Coord(self.row - other.row, self.col - other.col)

    def __mul__(self, k: int) -> Coord:
        return Coord(self.row * int(k), self.col * int(k))

    __rmul__ = __mul__

    def in_bounds(self, rows: int, cols: int) -> bool:
        return 0 <= self.row < rows and 0 <= self.col < cols

    def as_pair(self) -> tuple[int, int]:
        return (self.row, self.col)


class Direction(enum.IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def index(self) -> int:
        return int(self.value)

    @property
    def mask(self) -> int:
        return 1 << int(self.value)

    @property
    def offset(self) -> Coord:
        return _OFFSETS[self.value]

    def turn(self) -> Direction:
        """90 degrees clockwise."""
        return Direction((self.value + 1) % 4)

    def reverse(self) -> Direction:
        return Direction((self.value + 2) % 4)


_OFFSETS = (Coord(-1, 0), Coord(0, 1), Coord(1, 0), Coord(0, -1))

# (d_row, d_col) per direction index, for the int-only hot loops.
DELTAS = tuple(c.as_pair() for c in _OFFSETS)
