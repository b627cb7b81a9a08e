"""
End-to-end patrol run: parse -> step table -> baseline patrol -> obstruction search.

Produces the two numbers the puzzle asks for:
  - n_visited: distinct cells on the baseline patrol (start included)
  - n_loop_obstructions: single obstruction placements that trap the guard
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from . import grid_io
from .grid import Direction
from .search import CHUNKS_PER_WORKER, count_loop_obstructions
from .simulate import patrol_slow
from .step_table import StepTable


@dataclass(frozen=True)
class PatrolConfig:
    n_workers: int | None = None
    chunks_per_worker: int = CHUNKS_PER_WORKER
    progress: bool = True
    step_dtype: str | None = None
    obstruction_symbol: str = "#"
    free_symbol: str = "."
    start_symbol: str = "^"


@dataclass(frozen=True)
class PatrolSummary:
    n_visited: int
    n_loop_obstructions: int
    baseline_is_loop: bool


def run_patrol(lab: grid_io.LabMap, cfg: PatrolConfig = PatrolConfig()) -> PatrolSummary:
    t0 = time.perf_counter()
    table = StepTable.from_obstructions(lab.obstructed, dtype=cfg.step_dtype)
    print(
        f"[grid] {lab.rows}x{lab.cols} obstructions={int(lab.obstructed.sum())} "
        f"start=({lab.start.row},{lab.start.col}) dtype={table.dtype}",
        flush=True,
    )

    baseline = patrol_slow(table, lab.start, Direction.NORTH)
    print(f"[patrol] visited={baseline.n_visited} loop={baseline.is_loop}", flush=True)

    candidates = [pos for pos in baseline.visited_cells() if pos != lab.start]
    n_loops = count_loop_obstructions(
        table,
        lab.start,
        candidates,
        facing=Direction.NORTH,
        n_workers=cfg.n_workers,
        chunks_per_worker=cfg.chunks_per_worker,
        progress=cfg.progress,
    )
    print(
        f"[search] candidates={len(candidates)} loop_obstructions={n_loops} "
        f"elapsed={time.perf_counter() - t0:.2f}s",
        flush=True,
    )
    return PatrolSummary(
        n_visited=baseline.n_visited,
        n_loop_obstructions=n_loops,
        baseline_is_loop=baseline.is_loop,
    )


def solve_text(text: str, cfg: PatrolConfig = PatrolConfig()) -> PatrolSummary:
    lab = grid_io.parse_grid(
        text,
        obstruction=cfg.obstruction_symbol,
        free=cfg.free_symbol,
        start=cfg.start_symbol,
    )
    return run_patrol(lab, cfg)


def solve_file(path: Path, cfg: PatrolConfig = PatrolConfig()) -> PatrolSummary:
    return solve_text(Path(path).read_text(), cfg)
