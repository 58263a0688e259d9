"""Composite bitmap construction, rendering and synthetic mosaics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .matcher import EdgeIndex
from .orientation import ORIENTATIONS
from .solver import MosaicGrid
from .tiles import CLEAR_CELL, SET_CELL, Tile

SET_COLOR = (40, 70, 160)
CLEAR_COLOR = (230, 235, 245)
HIGHLIGHT_COLOR = (220, 60, 40)


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def compose_bitmap(grid: MosaicGrid, tiles: Sequence[Tile]) -> np.ndarray:
    """Crop every placed tile and join them in grid order into one bitmap."""
    rows = grid.oriented_tiles(tiles)
    strips = [np.hstack([tile.cropped().content for tile in row]) for row in rows]
    bitmap = np.vstack(strips)
    side = grid.size * (tiles[0].side - 2)
    assert bitmap.shape == (side, side), f"composite is {bitmap.shape}, expected {side}x{side}"
    bitmap.setflags(write=False)
    return bitmap


def render_bitmap(bitmap: np.ndarray, highlight: Optional[np.ndarray] = None, mark: str = "O") -> str:
    """Render a bitmap as text, optionally drawing highlighted cells with ``mark``."""
    lines = []
    for r in range(bitmap.shape[0]):
        chars = []
        for c in range(bitmap.shape[1]):
            if highlight is not None and highlight[r, c]:
                chars.append(mark)
            else:
                chars.append(SET_CELL if bitmap[r, c] else CLEAR_CELL)
        lines.append("".join(chars))
    return "\n".join(lines)


def bitmap_to_rgb(bitmap: np.ndarray, highlight: Optional[np.ndarray] = None) -> np.ndarray:
    """Convert a boolean bitmap to an RGB uint8 image for display."""
    image = np.empty(bitmap.shape + (3,), dtype=np.uint8)
    image[...] = CLEAR_COLOR
    image[bitmap] = SET_COLOR
    if highlight is not None:
        image[highlight] = HIGHLIGHT_COLOR
    return image


def shuffle_tiles(tiles: Sequence[Tile], seed: int = 42) -> Tuple[List[Tile], np.ndarray]:
    """Return a shuffled copy of tiles and the applied permutation."""
    rng = set_random_seed(seed)
    order = rng.permutation(len(tiles))
    return [tiles[i] for i in order], order


@dataclass
class SyntheticMosaic:
    """A generated mosaic: the source bitmap and its scrambled tiles."""

    image: np.ndarray
    tiles: List[Tile]
    size: int
    tile_side: int

    def interior(self) -> np.ndarray:
        """The source image with every tile's border ring removed."""
        step = self.tile_side
        keep = [i for i in range(self.size * step) if 0 < i % step < step - 1]
        return self.image[np.ix_(keep, keep)]


def _draw_tiles(rng: np.random.Generator, size: int, tile_side: int) -> List[List[np.ndarray]]:
    cells: List[List[np.ndarray]] = []
    for r in range(size):
        row: List[np.ndarray] = []
        for c in range(size):
            content = rng.random((tile_side, tile_side)) < 0.5
            if c > 0:
                content[:, 0] = row[c - 1][:, -1]
            if r > 0:
                content[0, :] = cells[r - 1][c][-1, :]
            row.append(content)
        cells.append(row)
    return cells


def _is_well_formed(tiles: Sequence[Tile], size: int) -> bool:
    """Check that every border matches only its true neighbor; tiles in row-major order."""
    index = EdgeIndex.build(tiles)
    if any(count > 2 for count in index.counts.values()):
        return False
    for k, tile in enumerate(tiles):
        r, c = divmod(k, size)
        outer = (r == 0) + (r == size - 1) + (c == 0) + (c == size - 1)
        # A palindromic border is counted twice by its own tile.
        if any(tile.edges[i] == tile.edges[i + 4] for i in range(4)):
            return False
        if index.unique_edges(tile) != 2 * outer:
            return False
    return True


def generate_mosaic(
    size: int = 3, tile_side: int = 12, seed: int = 42, max_attempts: int = 100
) -> SyntheticMosaic:
    """Generate a random mosaic whose tiles share seams and match uniquely.

    Tiles are cut with overlapping borders, given random orientations and
    ids, then shuffled. Draws are repeated until every border matches at
    most one other tile.
    """
    if size < 2 or tile_side < 3:
        raise ValueError("size must be >= 2 and tile_side >= 3")
    rng = set_random_seed(seed)
    for _ in range(max_attempts):
        cells = _draw_tiles(rng, size, tile_side)
        image = np.vstack([np.hstack(row) for row in cells])
        ids = rng.choice(np.arange(1000, 10000), size=size * size, replace=False)
        tiles = []
        for k, content in enumerate(c for row in cells for c in row):
            orientation = ORIENTATIONS[int(rng.integers(0, len(ORIENTATIONS)))]
            tiles.append(Tile.from_content(int(ids[k]), orientation.apply(content)))
        if not _is_well_formed(tiles, size):
            continue
        order = rng.permutation(len(tiles))
        return SyntheticMosaic(
            image=image,
            tiles=[tiles[i] for i in order],
            size=size,
            tile_side=tile_side,
        )
    raise ValueError(f"no well-formed mosaic after {max_attempts} attempts")
