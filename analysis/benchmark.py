#!/usr/bin/env python3
"""
Benchmark the patrol kernels on one grid: table build, slow walk, and the
obstruction search at several worker counts.

Output format per step:
  description | implemented by xxx | ___ benchmark results

Usage:
  cd <repo_root>; python analysis/benchmark.py [grid_path]
"""
from __future__ import annotations

import os
import resource
import sys
import time
from pathlib import Path

BASE = Path(__file__).resolve().parent
REPO_DIR = BASE.parent
if str(REPO_DIR / "src") not in sys.path:
    sys.path.insert(0, str(REPO_DIR / "src"))

import numpy as np

from patrol import Direction, StepTable, count_loop_obstructions, load_grid, patrol_slow

GRID_PATH = BASE / "data" / "example.txt"
N_REP = 5


def _rss_mb() -> float:
    return resource.getrusage(resource.RUSAGE_SELF).ru_maxrss / 1024.0


def _mean_time(fn, n_rep: int = N_REP) -> float:
    timings = []
    for _ in range(n_rep):
        t0 = time.perf_counter()
        fn()
        timings.append(time.perf_counter() - t0)
    return float(np.mean(timings))


def main() -> None:
    grid_path = Path(sys.argv[1]) if len(sys.argv) > 1 else GRID_PATH
    lab = load_grid(grid_path)
    lines: list[str] = [
        f"Patrol benchmark: {grid_path.name} ({lab.rows}x{lab.cols})",
        "=" * 60,
        "",
    ]

    t_build = _mean_time(lambda: StepTable.from_obstructions(lab.obstructed))
    table = StepTable.from_obstructions(lab.obstructed)
    lines.extend([
        "Step table build (one add_obstruction per obstruction)",
        "   Implemented by: patrol.step_table.StepTable.from_obstructions",
        f"   ___ Benchmark: {t_build:.6f} s (mean over {N_REP}), dtype {table.dtype}, RSS {_rss_mb():.1f} MB",
        "",
    ])

    t_slow = _mean_time(lambda: patrol_slow(table, lab.start, Direction.NORTH))
    baseline = patrol_slow(table, lab.start, Direction.NORTH)
    candidates = [p for p in baseline.visited_cells() if p != lab.start]
    lines.extend([
        "Baseline patrol (cell by cell)",
        "   Implemented by: patrol.simulate.patrol_slow",
        f"   ___ Benchmark: {t_slow:.6f} s (mean over {N_REP}), visited={baseline.n_visited}",
        "",
    ])

    worker_counts = sorted({1, 2, os.cpu_count() or 1})
    for n_workers in worker_counts:
        t0 = time.perf_counter()
        n_loops = count_loop_obstructions(table, lab.start, candidates, n_workers=n_workers)
        t_search = time.perf_counter() - t0
        lines.extend([
            f"Obstruction search, {n_workers} worker(s)",
            "   Implemented by: patrol.search.count_loop_obstructions",
            f"   ___ Benchmark: {t_search:.3f} s, candidates={len(candidates)}, loops={n_loops}",
            "",
        ])

    out_path = BASE / "benchmark_results.txt"
    out_path.write_text("\n".join(lines))
    print("\n".join(lines))
    print("Wrote", out_path)


if __name__ == "__main__":
    main()
