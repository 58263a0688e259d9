"""Backtracking assembly of oriented tiles into a square grid."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .errors import InconsistentInputError, UnsolvableError
from .matcher import Direction, EdgeIndex, EdgeMatcher, find_corners, grid_size
from .orientation import ORIENTATIONS, Orientation
from .tiles import Side, Tile

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the assembly search."""

    use_corner_starts: bool = True
    max_start_tiles: Optional[int] = None
    max_expansions: Optional[int] = None


@dataclass(frozen=True)
class Placement:
    """A tile fixed at a grid cell under a given orientation."""

    row: int
    col: int
    tile_id: int
    orientation: Orientation


@dataclass(frozen=True)
class MosaicGrid:
    """Completed size x size assembly, placements in row-major order."""

    size: int
    placements: Tuple[Placement, ...]

    def at(self, row: int, col: int) -> Placement:
        return self.placements[row * self.size + col]

    def tile_ids(self) -> np.ndarray:
        ids = [p.tile_id for p in self.placements]
        return np.array(ids, dtype=np.int64).reshape(self.size, self.size)

    def oriented_tiles(self, tiles: Sequence[Tile]) -> List[List[Tile]]:
        """Return grid rows of tiles with their assigned orientations applied."""
        by_id = {tile.id: tile for tile in tiles}
        rows: List[List[Tile]] = []
        for r in range(self.size):
            row = []
            for c in range(self.size):
                placement = self.at(r, c)
                row.append(by_id[placement.tile_id].oriented(placement.orientation))
            rows.append(row)
        return rows


@dataclass(frozen=True)
class AssemblyResult:
    """Outcome of a search: a grid on success, a reason on failure."""

    solved: bool
    grid: Optional[MosaicGrid] = None
    reason: str = ""
    expansions: int = 0


@dataclass
class _Frame:
    placed: Tuple[Placement, ...]
    remaining: frozenset
    candidates: Iterator[Tuple[int, Orientation]]


class MosaicSolver:
    """Place every tile so that all shared borders agree."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config if config is not None else SolverConfig()
        self.matcher = EdgeMatcher()

    def solve(
        self,
        tiles: Sequence[Tile],
        index: Optional[EdgeIndex] = None,
        corners: Optional[Sequence[int]] = None,
    ) -> MosaicGrid:
        """Return the assembled grid or raise `UnsolvableError`."""
        result = self.search(tiles, index=index, corners=corners)
        if not result.solved or result.grid is None:
            raise UnsolvableError(result.reason)
        return result.grid

    def search(
        self,
        tiles: Sequence[Tile],
        index: Optional[EdgeIndex] = None,
        corners: Optional[Sequence[int]] = None,
    ) -> AssemblyResult:
        """Depth-first search over row-major cells with an explicit stack."""
        size = grid_size(len(tiles))
        by_id = {tile.id: tile for tile in tiles}
        if len(by_id) != len(tiles):
            raise InconsistentInputError("tile ids must be unique")

        oriented = {
            (tile.id, o): tile.oriented(o) for tile in tiles for o in ORIENTATIONS
        }
        by_left: Dict[int, List[Tuple[int, Orientation]]] = defaultdict(list)
        by_top: Dict[int, List[Tuple[int, Orientation]]] = defaultdict(list)
        for tile_id in sorted(by_id):
            for o in ORIENTATIONS:
                tile = oriented[(tile_id, o)]
                by_left[tile.edge(Side.LEFT)].append((tile_id, o))
                by_top[tile.edge(Side.TOP)].append((tile_id, o))

        starts = self._start_tiles(tiles, index, corners)
        logger.debug("assembling %dx%d grid from start tiles %s", size, size, starts)

        def candidates(
            placed: Tuple[Placement, ...], remaining: frozenset
        ) -> Iterator[Tuple[int, Orientation]]:
            pos = len(placed)
            r, c = divmod(pos, size)
            left = oriented[_key(placed[pos - 1])] if c > 0 else None
            up = oriented[_key(placed[pos - size])] if r > 0 else None
            if left is not None:
                pool = by_left.get(left.edge(Side.RIGHT), [])
            elif up is not None:
                pool = by_top.get(up.edge(Side.BOTTOM), [])
            else:
                pool = [(tile_id, o) for tile_id in starts for o in ORIENTATIONS]
            for tile_id, o in pool:
                if tile_id not in remaining:
                    continue
                tile = oriented[(tile_id, o)]
                if left is not None and not self.matcher.fits(left, tile, Direction.RIGHT):
                    continue
                if up is not None and not self.matcher.fits(up, tile, Direction.DOWN):
                    continue
                yield tile_id, o

        total = size * size
        root_remaining = frozenset(by_id)
        stack = [_Frame((), root_remaining, candidates((), root_remaining))]
        expansions = 0
        cap = self.config.max_expansions
        while stack:
            frame = stack[-1]
            choice = next(frame.candidates, None)
            if choice is None:
                stack.pop()
                continue

            expansions += 1
            if cap is not None and expansions > cap:
                logger.warning("assembly stopped after %d expansions", cap)
                return AssemblyResult(
                    solved=False,
                    reason=f"search exceeded {cap} node expansions",
                    expansions=expansions - 1,
                )

            tile_id, o = choice
            r, c = divmod(len(frame.placed), size)
            placed = frame.placed + (Placement(r, c, tile_id, o),)
            remaining = frame.remaining - {tile_id}
            if len(placed) == total:
                logger.info("assembled %dx%d grid in %d expansions", size, size, expansions)
                return AssemblyResult(
                    solved=True,
                    grid=MosaicGrid(size=size, placements=placed),
                    expansions=expansions,
                )
            stack.append(_Frame(placed, remaining, candidates(placed, remaining)))

        return AssemblyResult(
            solved=False,
            reason=f"no consistent assembly from start tiles {starts}",
            expansions=expansions,
        )

    def _start_tiles(
        self,
        tiles: Sequence[Tile],
        index: Optional[EdgeIndex],
        corners: Optional[Sequence[int]],
    ) -> List[int]:
        """Select the tiles tried at the top-left cell."""
        if corners is not None:
            starts = sorted(corners)
        elif self.config.use_corner_starts:
            starts = find_corners(tiles, index if index is not None else EdgeIndex.build(tiles))
        else:
            starts = sorted(tile.id for tile in tiles)
        if self.config.max_start_tiles is not None:
            starts = starts[: self.config.max_start_tiles]
        return starts


def _key(placement: Placement) -> Tuple[int, Orientation]:
    return placement.tile_id, placement.orientation
