"""
Lab map parsing.

Input layout: one text line per grid row, every row the same width.
  '#' obstruction, '.' free, '^' guard start (facing North).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .grid import Coord


@dataclass(frozen=True)
class LabMap:
    rows: int
    cols: int
    obstructed: np.ndarray  # (rows, cols) bool
    start: Coord


def parse_grid(
    text: str,
    *,
    obstruction: str = "#",
    free: str = ".",
    start: str = "^",
) -> LabMap:
    """
    Parse a rectangular character grid.

    Raises ValueError on empty input, ragged rows, unknown symbols, or anything
    other than exactly one start symbol.
    """
    lines = [ln.rstrip("\r") for ln in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise ValueError("Empty grid.")

    rows = len(lines)
    cols = len(lines[0])
    if cols == 0:
        raise ValueError("Grid rows must be non-empty.")

    obstructed = np.zeros((rows, cols), dtype=bool)
    starts: list[Coord] = []
    for r, line in enumerate(lines):
        if len(line) != cols:
            raise ValueError(f"Non-rectangular grid: row {r} has width {len(line)}, expected {cols}.")
        for c, ch in enumerate(line):
            if ch == obstruction:
                obstructed[r, c] = True
            elif ch == start:
                starts.append(Coord(r, c))
            elif ch != free:
                raise ValueError(f"Unknown symbol {ch!r} at row {r}, col {c}.")

    if len(starts) != 1:
        raise ValueError(f"Expected exactly one start symbol {start!r}, found {len(starts)}.")
    return LabMap(rows=rows, cols=cols, obstructed=obstructed, start=starts[0])


def load_grid(path: Path, **symbols: str) -> LabMap:
    path = Path(path)
    return parse_grid(path.read_text(), **symbols)
