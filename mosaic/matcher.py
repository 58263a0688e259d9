"""Edge multiplicity index, adjacency checks and corner detection."""

from __future__ import annotations

import math
from collections import Counter, defaultdict
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Set

from .errors import InconsistentInputError
from .tiles import Side, Tile


class Direction(IntEnum):
    """Supported relative directions between neighboring tiles."""

    RIGHT = 0
    DOWN = 1


@dataclass(frozen=True)
class EdgeIndex:
    """Read-only map from border fingerprint to how often tiles expose it."""

    counts: Mapping[int, int]
    tile_owners: Mapping[int, FrozenSet[int]]

    @classmethod
    def build(cls, tiles: Iterable[Tile]) -> "EdgeIndex":
        """Count all 8 fingerprints of every tile in its unrotated form."""
        counts: Counter = Counter()
        owners: Dict[int, Set[int]] = defaultdict(set)
        for tile in tiles:
            for fingerprint in tile.edges:
                counts[fingerprint] += 1
                owners[fingerprint].add(tile.id)
        return cls(
            counts=MappingProxyType(dict(counts)),
            tile_owners=MappingProxyType({fp: frozenset(ids) for fp, ids in owners.items()}),
        )

    def count(self, fingerprint: int) -> int:
        return self.counts.get(fingerprint, 0)

    def owners(self, fingerprint: int) -> FrozenSet[int]:
        return self.tile_owners.get(fingerprint, frozenset())

    def unique_edges(self, tile: Tile) -> int:
        """Number of the tile's fingerprints seen exactly once across all tiles."""
        return sum(1 for fingerprint in tile.edges if self.count(fingerprint) == 1)

    def check_multiplicity(self) -> None:
        """Raise if any border could join more than two tiles."""
        crowded = sorted(fp for fp, ids in self.tile_owners.items() if len(ids) > 2)
        if crowded:
            owners = sorted(self.tile_owners[crowded[0]])
            raise InconsistentInputError(
                f"{len(crowded)} border fingerprints are shared by more than two tiles "
                f"(e.g. {crowded[0]} on tiles {owners})"
            )


class EdgeMatcher:
    """Compare oriented tiles along a shared border."""

    @staticmethod
    def fits(tile_a: Tile, tile_b: Tile, direction: Direction) -> bool:
        """True if ``tile_b`` can sit immediately right of / below ``tile_a``."""
        if direction == Direction.RIGHT:
            return tile_a.edge(Side.RIGHT) == tile_b.edge(Side.LEFT)
        if direction == Direction.DOWN:
            return tile_a.edge(Side.BOTTOM) == tile_b.edge(Side.TOP)
        raise ValueError(f"Unsupported direction: {direction}")


def grid_size(tile_count: int) -> int:
    """Side of the square grid holding ``tile_count`` tiles."""
    size = math.isqrt(tile_count)
    if tile_count == 0 or size * size != tile_count:
        raise InconsistentInputError(f"{tile_count} tiles cannot form a square mosaic")
    return size


def find_corners(tiles: Iterable[Tile], index: EdgeIndex) -> List[int]:
    """Return the sorted ids of tiles with exactly two unmatched borders.

    An unmatched border contributes two unique fingerprints (forward and
    reversed), so a corner tile has exactly four.
    """
    corners = sorted(tile.id for tile in tiles if index.unique_edges(tile) == 4)
    if len(corners) != 4:
        raise InconsistentInputError(f"expected 4 corner tiles, found {len(corners)}: {corners}")
    return corners


def corner_product(corners: Iterable[int]) -> int:
    return math.prod(corners)
