"""End-to-end tests on the reference mosaic."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.errors import InconsistentInputError
from mosaic.evaluator import MosaicEvaluator
from mosaic.orientation import IDENTITY
from mosaic.scanner import SEA_MONSTER, count_matches
from mosaic.solver import MosaicGrid, Placement, SolverConfig


def test_example_end_to_end(example_tiles) -> None:
    result = MosaicEvaluator().evaluate(example_tiles)
    assert result.corner_ids == [1171, 1951, 2971, 3079]
    assert result.corner_product == 20899048083289
    assert result.bitmap.shape == (24, 24)
    assert result.pattern_matches == 2
    assert result.roughness == 273
    assert count_matches(result.orientation.apply(result.bitmap), SEA_MONSTER) == 2


def test_example_end_to_end_without_corner_starts(example_tiles) -> None:
    result = MosaicEvaluator(SolverConfig(use_corner_starts=False)).evaluate(example_tiles)
    assert result.roughness == 273


def test_seam_mismatches_detects_bad_grid(example_tiles) -> None:
    """Tiles placed in input order without rotation leave broken seams."""
    placements = tuple(
        Placement(k // 3, k % 3, tile.id, IDENTITY) for k, tile in enumerate(example_tiles)
    )
    grid = MosaicGrid(size=3, placements=placements)
    evaluator = MosaicEvaluator()
    assert evaluator.seam_mismatches(grid, example_tiles)
    assert evaluator.compute_neighbor_accuracy(grid, example_tiles) < 1.0


def test_solved_grid_has_full_neighbor_accuracy(example_tiles) -> None:
    evaluator = MosaicEvaluator()
    result = evaluator.evaluate(example_tiles)
    assert evaluator.compute_neighbor_accuracy(result.grid, example_tiles) == 1.0
    assert np.count_nonzero(result.bitmap) == 303


def test_evaluate_rejects_non_mosaic(example_tiles) -> None:
    with pytest.raises(InconsistentInputError):
        MosaicEvaluator().evaluate(example_tiles[:4])
