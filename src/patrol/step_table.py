"""
Directional jump-distance index over a grid of obstructions.

For every cell and each of the four directions the table stores how many moves
the guard can make before it would step onto an obstruction. With nothing in
the way, the value is the number of moves that carries the guard off the grid,
so a single jump of that length exits:

  steps_to_obstruction[d, r, c]    (4, rows, cols), narrow unsigned dtype

Obstructed cells hold the sentinel `iinfo(dtype).max` in all four planes.
The planes are maintained independently and only agree on which cells are
obstructed. Adding or removing one obstruction touches at most one row and one
column.
"""

from __future__ import annotations

import numpy as np

from .grid import DELTAS, Coord, Direction

_STEP_DTYPES = (np.uint8, np.uint16, np.uint32)


def step_dtype_for(rows: int, cols: int) -> np.dtype:
    """Smallest unsigned dtype whose sentinel lies strictly above max(rows, cols)."""
    extent = max(int(rows), int(cols))
    for dt in _STEP_DTYPES:
        if extent < int(np.iinfo(dt).max):
            return np.dtype(dt)
    raise ValueError(f"Grid extent {extent} too large for a step table.")


class StepTable:
    def __init__(self, rows: int, cols: int, dtype=None):
        rows = int(rows)
        cols = int(cols)
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid must be non-empty, got {rows}x{cols}.")
        dtype = step_dtype_for(rows, cols) if dtype is None else np.dtype(dtype)
        if dtype.kind != "u":
            raise ValueError(f"Step dtype must be unsigned, got {dtype}.")
        sentinel = int(np.iinfo(dtype).max)
        if rows >= sentinel or cols >= sentinel:
            raise ValueError(f"Grid {rows}x{cols} does not fit step dtype {dtype} (sentinel {sentinel}).")

        self.rows = rows
        self.cols = cols
        self.sentinel = sentinel

        r = np.arange(rows, dtype=np.int64)[:, None]
        c = np.arange(cols, dtype=np.int64)[None, :]
        steps = np.empty((4, rows, cols), dtype=dtype)
        steps[Direction.NORTH] = r + 1
        steps[Direction.EAST] = cols - c
        steps[Direction.SOUTH] = rows - r
        steps[Direction.WEST] = c + 1
        self.steps_to_obstruction = steps

    @classmethod
    def from_obstructions(cls, obstructed: np.ndarray, dtype=None) -> StepTable:
        """Build a table from a (rows, cols) bool obstruction mask."""
        obstructed = np.asarray(obstructed, dtype=bool)
        if obstructed.ndim != 2:
            raise ValueError("obstructed must be a 2-D mask.")
        table = cls(obstructed.shape[0], obstructed.shape[1], dtype=dtype)
        for r, c in np.argwhere(obstructed):
            table.add_obstruction(Coord(int(r), int(c)))
        return table

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def dtype(self) -> np.dtype:
        return self.steps_to_obstruction.dtype

    def copy(self) -> StepTable:
        out = StepTable.__new__(StepTable)
        out.rows = self.rows
        out.cols = self.cols
        out.sentinel = self.sentinel
        out.steps_to_obstruction = self.steps_to_obstruction.copy()
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepTable):
            return NotImplemented
        return (
            self.steps_to_obstruction.dtype == other.steps_to_obstruction.dtype
            and np.array_equal(self.steps_to_obstruction, other.steps_to_obstruction)
        )

    __hash__ = None

    def __str__(self) -> str:
        width = len(str(max(self.rows, self.cols)))
        parts = []
        for d in Direction:
            plane = self.steps_to_obstruction[d]
            lines = [
                " ".join("#".rjust(width) if v == self.sentinel else str(v).rjust(width) for v in row.tolist())
                for row in plane
            ]
            parts.append(f"Steps {d.name}:\n" + "\n".join(lines))
        return "\n".join(parts)

    # --- queries ---

    def _inside(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def steps_at(self, r: int, c: int, d: int) -> int:
        """Raw int lookup for the walk loops; (r, c) must be inside the grid."""
        v = self.steps_to_obstruction.item(d, r, c)
        if v == self.sentinel:
            raise RuntimeError(f"Internal error: step query on obstructed cell ({r}, {c}).")
        return v

    def remaining_steps(self, pos: Coord, facing: Direction) -> int:
        if not self._inside(pos.row, pos.col):
            raise ValueError(f"{pos} is outside the {self.rows}x{self.cols} grid.")
        return self.steps_at(pos.row, pos.col, int(facing))

    def is_obstructed(self, pos: Coord) -> bool:
        if not self._inside(pos.row, pos.col):
            raise ValueError(f"{pos} is outside the {self.rows}x{self.cols} grid.")
        # Any plane will do.
        return self.steps_to_obstruction.item(0, pos.row, pos.col) == self.sentinel

    # --- updates ---

    def _free_value(self, d: int, r: int, c: int) -> int | None:
        """Plane-d value at (r, c), or None when off-grid or obstructed."""
        if not self._inside(r, c):
            return None
        v = self.steps_to_obstruction.item(d, r, c)
        return None if v == self.sentinel else v

    def add_obstruction(self, pos: Coord) -> None:
        r, c = pos.row, pos.col
        if not self._inside(r, c):
            raise ValueError(f"{pos} is outside the {self.rows}x{self.cols} grid.")
        if self.is_obstructed(pos):
            raise RuntimeError(f"Internal error: {pos} is already obstructed.")
        steps = self.steps_to_obstruction

        # Free cells between pos and the previous obstruction (or edge), looking
        # backward along each direction. All reads happen before any write.
        behind: list[int | None] = []
        for d in range(4):
            back = (d + 2) % 4
            dr, dc = DELTAS[back]
            behind.append(self._free_value(back, r + dr, c + dc))

        for d in range(4):
            n = behind[d]
            if n is None:
                continue
            dr, dc = DELTAS[(d + 2) % 4]
            for k in range(n + 1):
                rr = r + (k + 1) * dr
                cc = c + (k + 1) * dc
                if not self._inside(rr, cc):
                    break
                steps[d, rr, cc] = k

        steps[:, r, c] = self.sentinel

    def remove_obstruction(self, pos: Coord) -> None:
        r, c = pos.row, pos.col
        if not self._inside(r, c):
            raise ValueError(f"{pos} is outside the {self.rows}x{self.cols} grid.")
        steps = self.steps_to_obstruction
        if not bool(np.all(steps[:, r, c] == self.sentinel)):
            raise RuntimeError(f"Internal error: {pos} is not obstructed in every direction.")

        # (cells to rewrite going backward, value written at pos) per direction.
        plan: list[tuple[int, int]] = []
        for d in range(4):
            back = (d + 2) % 4
            br, bc = DELTAS[back]
            n_behind = self._free_value(back, r + br, c + bc)
            n_cells = 1 if n_behind is None else n_behind + 2

            fr, fc = DELTAS[d]
            if not self._inside(r + fr, c + fc):
                seed = 1
            else:
                ahead = steps.item(d, r + fr, c + fc)
                seed = 0 if ahead == self.sentinel else ahead + 1
            plan.append((n_cells, seed))

        for d in range(4):
            n_cells, seed = plan[d]
            dr, dc = DELTAS[(d + 2) % 4]
            for k in range(n_cells):
                rr = r + k * dr
                cc = c + k * dc
                if not self._inside(rr, cc):
                    break
                steps[d, rr, cc] = seed + k
