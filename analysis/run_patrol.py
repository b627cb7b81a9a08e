#!/usr/bin/env python3
"""
Run the full patrol: baseline walk, then the parallel obstruction search.

Usage:
  cd <repo_root>
  python analysis/run_patrol.py [grid_path] [n_workers]

If args omitted, uses GRID_PATH below and all available cores.
Prints the visited-cell count and the loop-obstruction count.
"""

from __future__ import annotations

import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
REPO_DIR = BASE_DIR.parent
if str(REPO_DIR / "src") not in sys.path:
    sys.path.insert(0, str(REPO_DIR / "src"))

from patrol import PatrolConfig, solve_file
from patrol.search import CHUNKS_PER_WORKER

GRID_PATH = BASE_DIR / "data" / "example.txt"


def main() -> None:
    argv = sys.argv[1:]
    grid_path = Path(argv[0]) if len(argv) > 0 else GRID_PATH
    n_workers = int(argv[1]) if len(argv) > 1 else None
    if not grid_path.exists():
        raise FileNotFoundError(f"Grid file not found: {grid_path}")

    cfg = PatrolConfig(n_workers=n_workers, chunks_per_worker=CHUNKS_PER_WORKER)
    summary = solve_file(grid_path, cfg)
    print(f"[part_a] {summary.n_visited}", flush=True)
    print(f"[part_b] {summary.n_loop_obstructions}", flush=True)


if __name__ == "__main__":
    main()
