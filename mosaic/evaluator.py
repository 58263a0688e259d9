"""End-to-end mosaic evaluation and seam consistency metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .matcher import Direction, EdgeIndex, EdgeMatcher, corner_product, find_corners
from .orientation import Orientation
from .scanner import SEA_MONSTER, Pattern, best_orientation
from .solver import MosaicGrid, MosaicSolver, SolverConfig
from .tiles import Tile
from .utils import compose_bitmap


@dataclass
class EvaluationResult:
    """Container for the assembly outputs."""

    corner_ids: List[int]
    corner_product: int
    grid: MosaicGrid
    bitmap: np.ndarray
    orientation: Orientation
    pattern_matches: int
    roughness: int


class MosaicEvaluator:
    """Run the full pipeline and check assembled grids."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.solver = MosaicSolver(config)
        self.matcher = EdgeMatcher()

    def seam_mismatches(
        self, grid: MosaicGrid, tiles: Sequence[Tile]
    ) -> List[Tuple[Tuple[int, int], Direction]]:
        """List cells whose right/down seam disagrees under assigned orientations."""
        rows = grid.oriented_tiles(tiles)
        size = grid.size
        bad: List[Tuple[Tuple[int, int], Direction]] = []
        for r in range(size):
            for c in range(size):
                if c + 1 < size and not self.matcher.fits(rows[r][c], rows[r][c + 1], Direction.RIGHT):
                    bad.append(((r, c), Direction.RIGHT))
                if r + 1 < size and not self.matcher.fits(rows[r][c], rows[r + 1][c], Direction.DOWN):
                    bad.append(((r, c), Direction.DOWN))
        return bad

    def compute_neighbor_accuracy(self, grid: MosaicGrid, tiles: Sequence[Tile]) -> float:
        """Fraction of right/down seams whose borders agree."""
        total = 2 * grid.size * (grid.size - 1)
        if not total:
            return 1.0
        return 1.0 - len(self.seam_mismatches(grid, tiles)) / total

    def evaluate(self, tiles: Sequence[Tile], pattern: Pattern = SEA_MONSTER) -> EvaluationResult:
        """Find corners, assemble, compose and scan for ``pattern``."""
        index = EdgeIndex.build(tiles)
        index.check_multiplicity()
        corners = find_corners(tiles, index)
        starts = corners if self.solver.config.use_corner_starts else None
        grid = self.solver.solve(tiles, index=index, corners=starts)
        bitmap = compose_bitmap(grid, tiles)
        orientation, matches = best_orientation(bitmap, pattern)
        return EvaluationResult(
            corner_ids=corners,
            corner_product=corner_product(corners),
            grid=grid,
            bitmap=bitmap,
            orientation=orientation,
            pattern_matches=matches,
            roughness=int(np.count_nonzero(bitmap)) - matches * pattern.marked_cells,
        )
