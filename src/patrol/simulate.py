"""
Guard patrol simulation on top of a StepTable.

Transition rule (both walks): with zero steps left ahead, turn 90 degrees
clockwise; otherwise move.

  - patrol_slow: one cell per move, records which facings each cell was
    visited under. Used for the baseline patrol and the search candidates.
  - patrol_fast: jumps straight to the next turning point and only answers
    loop / no loop, using Brent's cycle detection on (position, facing).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .grid import DELTAS, Coord, Direction
from .step_table import StepTable


@dataclass
class Guard:
    pos: Coord
    facing: Direction = Direction.NORTH


@dataclass
class Patrol:
    """Slow-walk outcome: (rows, cols) uint8 facing bitmask and loop flag."""

    visited: np.ndarray
    is_loop: bool = False

    @property
    def n_visited(self) -> int:
        return int(np.count_nonzero(self.visited))

    def visited_cells(self) -> list[Coord]:
        """Visited cells in row-major order."""
        return [Coord(int(r), int(c)) for r, c in np.argwhere(self.visited != 0)]


def check_start(table: StepTable, start: Coord) -> None:
    """Raise ValueError unless `start` is a free cell of the table's grid."""
    if not start.in_bounds(table.rows, table.cols):
        raise ValueError(f"Start {start} is outside the {table.rows}x{table.cols} grid.")
    if table.is_obstructed(start):
        raise ValueError(f"Start {start} is obstructed.")


def patrol_slow(table: StepTable, start: Coord, facing: Direction = Direction.NORTH) -> Patrol:
    """
    Walk the guard cell by cell until it leaves the grid or repeats a
    (cell, facing) state. The start cell counts as visited.
    """
    check_start(table, start)
    rows, cols = table.shape
    result = Patrol(visited=np.zeros((rows, cols), dtype=np.uint8))
    guard = Guard(pos=start, facing=facing)
    result.visited[start.row, start.col] |= guard.facing.mask

    while True:
        if table.remaining_steps(guard.pos, guard.facing) == 0:
            guard.facing = guard.facing.turn()
        else:
            guard.pos = guard.pos + guard.facing.offset

        if not guard.pos.in_bounds(rows, cols):
            break
        cell = guard.pos.as_pair()
        if result.visited[cell] & guard.facing.mask:
            result.is_loop = True
            break
        result.visited[cell] |= guard.facing.mask

    return result


def _jump(table: StepTable, state: tuple[int, int, int]) -> tuple[int, int, int] | None:
    """Jump to the next turning point and turn. None once the guard is off the grid."""
    r, c, d = state
    n = table.steps_at(r, c, d)
    dr, dc = DELTAS[d]
    r += n * dr
    c += n * dc
    if not (0 <= r < table.rows and 0 <= c < table.cols):
        return None
    return (r, c, (d + 1) % 4)


def patrol_fast(table: StepTable, start: Coord, facing: Direction = Direction.NORTH) -> bool:
    """
    True when the guard's jump sequence repeats a state, False when it escapes.

    Brent's algorithm, existence only: the tortoise parks on the hare every time
    the hare has taken `power` steps since the last park, and `power` doubles.
    Leaving the grid is checked before equality on every advance.
    """
    check_start(table, start)
    tortoise = (start.row, start.col, int(facing))
    hare = _jump(table, tortoise)
    power = lam = 1
    while hare is not None:
        if hare == tortoise:
            return True
        if power == lam:
            tortoise = hare
            power *= 2
            lam = 0
        hare = _jump(table, hare)
        lam += 1
    return False
