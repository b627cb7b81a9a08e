"""
Exhaustive search for single-obstruction placements that trap the guard.

Each candidate is probed independently on a mutable StepTable:
  add_obstruction -> patrol_fast -> remove_obstruction
which leaves the table bit-identical to before the probe.

Workers: a multiprocessing.Pool whose initializer deep-copies the table once
per worker process. Candidates go out in chunks smaller than
n_candidates / n_workers so that fast workers pick up the slow chunks (looping
probes run much longer than escaping ones).
"""

from __future__ import annotations

import multiprocessing as mp
import os
from collections.abc import Sequence

from tqdm import tqdm

from .grid import Coord, Direction
from .simulate import check_start, patrol_fast
from .step_table import StepTable

CHUNKS_PER_WORKER = 8

# Per-process state, set by _init_worker.
_worker_table: StepTable | None = None
_worker_start: tuple[Coord, Direction] | None = None


def probe(table: StepTable, start: Coord, facing: Direction, pos: Coord) -> bool:
    """Does an obstruction at `pos` make the patrol loop? Restores `table`."""
    table.add_obstruction(pos)
    try:
        return patrol_fast(table, start, facing)
    finally:
        table.remove_obstruction(pos)


def _count_chunk(table: StepTable, start: Coord, facing: Direction, chunk: Sequence[Coord]) -> int:
    return sum(probe(table, start, facing, pos) for pos in chunk)


def _init_worker(table: StepTable, start: Coord, facing: Direction) -> None:
    global _worker_table, _worker_start
    _worker_table = table.copy()
    _worker_start = (start, facing)


def _worker_chunk(chunk: list[Coord]) -> int:
    if _worker_table is None or _worker_start is None:
        raise RuntimeError("Internal error: search worker used before initialization.")
    start, facing = _worker_start
    return _count_chunk(_worker_table, start, facing, chunk)


def chunk_candidates(candidates: Sequence[Coord], n_workers: int, chunks_per_worker: int = CHUNKS_PER_WORKER) -> list[list[Coord]]:
    n = len(candidates)
    size = max(1, n // (max(1, n_workers) * max(1, chunks_per_worker)))
    return [list(candidates[i : i + size]) for i in range(0, n, size)]


def count_loop_obstructions(
    table: StepTable,
    start: Coord,
    candidates: Sequence[Coord],
    *,
    facing: Direction = Direction.NORTH,
    n_workers: int | None = None,
    chunks_per_worker: int = CHUNKS_PER_WORKER,
    progress: bool = False,
) -> int:
    """
    Count candidate cells where one added obstruction makes the patrol loop.

    Args:
      table: step table of the unmodified grid. Never mutated.
      start, facing: guard start state.
      candidates: free cells to probe; must not contain `start`.
      n_workers: worker processes, None for os.cpu_count(). 1 runs in-process.
      chunks_per_worker: target number of chunks handed to each worker.
      progress: show a tqdm bar over finished chunks.
    """
    check_start(table, start)
    candidates = list(candidates)
    for pos in candidates:
        if pos == start:
            raise ValueError("Candidates must not include the guard start cell.")
        if not pos.in_bounds(table.rows, table.cols):
            raise ValueError(f"Candidate {pos} is outside the grid.")
        if table.is_obstructed(pos):
            raise ValueError(f"Candidate {pos} is already obstructed.")
    if not candidates:
        return 0

    if n_workers is None:
        n_workers = os.cpu_count() or 1
    n_workers = max(1, min(int(n_workers), len(candidates)))
    chunks = chunk_candidates(candidates, n_workers, chunks_per_worker)

    if n_workers == 1:
        local = table.copy()
        return sum(
            _count_chunk(local, start, facing, chunk)
            for chunk in tqdm(chunks, desc="probe", leave=True, disable=not progress)
        )

    total = 0
    with mp.Pool(n_workers, initializer=_init_worker, initargs=(table, start, facing)) as pool:
        for n_loops in tqdm(
            pool.imap_unordered(_worker_chunk, chunks),
            total=len(chunks),
            desc=f"probe x{n_workers}",
            leave=True,
            disable=not progress,
        ):
            total += n_loops
    return total
