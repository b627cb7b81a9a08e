"""
patrol: guard patrol simulation and loop-inducing obstruction search.

The main public entry points are:
  - `patrol_slow` / `patrol_fast` (single patrol)
  - `count_loop_obstructions` (parallel obstruction search)
  - `run_patrol` / `solve_text` (full run from a parsed or raw grid)
"""

from .grid import Coord, Direction
from .grid_io import LabMap, load_grid, parse_grid
from .search import count_loop_obstructions
from .simulate import Guard, Patrol, patrol_fast, patrol_slow
from .step_table import StepTable
from .workflow import PatrolConfig, PatrolSummary, run_patrol, solve_file, solve_text

__all__ = [
    "Coord",
    "Direction",
    "LabMap",
    "load_grid",
    "parse_grid",
    "StepTable",
    "Guard",
    "Patrol",
    "patrol_slow",
    "patrol_fast",
    "count_loop_obstructions",
    "PatrolConfig",
    "PatrolSummary",
    "run_patrol",
    "solve_text",
    "solve_file",
]
