"""
Tests for the obstruction search, serial and with a worker pool.
"""
from __future__ import annotations

import numpy as np
import pytest

from patrol.grid import Coord, Direction
from patrol.grid_io import parse_grid
from patrol.search import chunk_candidates, count_loop_obstructions, probe
from patrol.simulate import patrol_slow
from patrol.step_table import StepTable


def _setup(text: str):
    lab = parse_grid(text)
    table = StepTable.from_obstructions(lab.obstructed)
    baseline = patrol_slow(table, lab.start)
    candidates = [p for p in baseline.visited_cells() if p != lab.start]
    return lab, table, candidates


# --- Probes ---

def test_probe_restores_table(example_text):
    lab, table, candidates = _setup(example_text)
    before = table.steps_to_obstruction.copy()
    hits = [pos for pos in candidates if probe(table, lab.start, Direction.NORTH, pos)]
    assert np.array_equal(table.steps_to_obstruction, before)
    assert sorted(p.as_pair() for p in hits) == [(6, 3), (7, 6), (7, 7), (8, 1), (8, 3), (9, 7)]


def test_chunks_cover_candidates_and_are_small():
    cands = [Coord(0, i) for i in range(100)]
    chunks = chunk_candidates(cands, n_workers=4, chunks_per_worker=8)
    assert [p for ch in chunks for p in ch] == cands
    assert max(len(ch) for ch in chunks) < 100 // 4


# --- Counts ---

def test_example_has_six_loop_obstructions_serial(example_text):
    lab, table, candidates = _setup(example_text)
    before = table.steps_to_obstruction.copy()
    assert count_loop_obstructions(table, lab.start, candidates, n_workers=1) == 6
    assert np.array_equal(table.steps_to_obstruction, before)


@pytest.mark.parametrize("n_workers", [2, 3])
def test_example_count_independent_of_worker_count(n_workers, example_text):
    lab, table, candidates = _setup(example_text)
    assert count_loop_obstructions(table, lab.start, candidates, n_workers=n_workers) == 6


def test_random_grids_serial_matches_pool_and_brute_force(naive_patrol, random_lab):
    rng = np.random.default_rng(99)
    for _ in range(3):
        mask, start = random_lab(rng, 14, 14, 0.08)
        table = StepTable.from_obstructions(mask)
        baseline = patrol_slow(table, start)
        candidates = [p for p in baseline.visited_cells() if p != start]

        expected = 0
        for pos in candidates:
            mask[pos.row, pos.col] = True
            expected += int(naive_patrol(mask, start)[1])
            mask[pos.row, pos.col] = False

        assert count_loop_obstructions(table, start, candidates, n_workers=1) == expected
        assert count_loop_obstructions(table, start, candidates, n_workers=2, chunks_per_worker=2) == expected


def test_no_candidates_counts_zero():
    lab, table, _ = _setup("^..\n...\n")
    assert count_loop_obstructions(table, lab.start, [], n_workers=4) == 0


def test_bad_candidates_raise(example_text):
    lab, table, candidates = _setup(example_text)
    with pytest.raises(ValueError):
        count_loop_obstructions(table, lab.start, [lab.start], n_workers=1)
    with pytest.raises(ValueError):
        count_loop_obstructions(table, lab.start, [Coord(0, 4)], n_workers=1)
    with pytest.raises(ValueError):
        count_loop_obstructions(table, lab.start, [Coord(10, 0)], n_workers=1)


@pytest.mark.parametrize("start", [Coord(-1, -1), Coord(0, 10), Coord(0, 4)])
def test_bad_start_raises(example_text, start):
    """Off-grid or obstructed starts are rejected before any probing."""
    lab, table, candidates = _setup(example_text)
    with pytest.raises(ValueError):
        count_loop_obstructions(table, start, candidates, n_workers=1)
