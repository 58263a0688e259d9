"""Tests for composite bitmap construction and synthetic mosaics."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.matcher import EdgeIndex, find_corners
from mosaic.orientation import ORIENTATIONS
from mosaic.solver import MosaicSolver
from mosaic.utils import (
    CLEAR_COLOR,
    HIGHLIGHT_COLOR,
    SET_COLOR,
    bitmap_to_rgb,
    compose_bitmap,
    generate_mosaic,
    render_bitmap,
    shuffle_tiles,
)


def test_compose_example_bitmap(example_tiles) -> None:
    grid = MosaicSolver().solve(example_tiles)
    bitmap = compose_bitmap(grid, example_tiles)
    assert bitmap.shape == (24, 24)
    assert int(bitmap.sum()) == 303
    assert not bitmap.flags.writeable


def test_compose_uses_cropped_tiles_in_grid_order(example_tiles) -> None:
    grid = MosaicSolver().solve(example_tiles)
    bitmap = compose_bitmap(grid, example_tiles)
    rows = grid.oriented_tiles(example_tiles)
    np.testing.assert_array_equal(bitmap[:8, :8], rows[0][0].content[1:-1, 1:-1])
    np.testing.assert_array_equal(bitmap[8:16, 16:24], rows[1][2].content[1:-1, 1:-1])


@pytest.mark.parametrize("size,tile_side", [(2, 8), (3, 12), (5, 16)])
def test_synthetic_composite_matches_source(size: int, tile_side: int) -> None:
    """The composite equals the source interior under some global orientation."""
    mosaic = generate_mosaic(size=size, tile_side=tile_side, seed=11)
    index = EdgeIndex.build(mosaic.tiles)
    grid = MosaicSolver().solve(mosaic.tiles, index=index, corners=find_corners(mosaic.tiles, index))
    bitmap = compose_bitmap(grid, mosaic.tiles)
    assert bitmap.shape == (size * (tile_side - 2),) * 2
    source = mosaic.interior()
    assert any(np.array_equal(o.apply(source), bitmap) for o in ORIENTATIONS)


def test_generate_mosaic_is_deterministic() -> None:
    a = generate_mosaic(size=3, tile_side=12, seed=5)
    b = generate_mosaic(size=3, tile_side=12, seed=5)
    assert [t.id for t in a.tiles] == [t.id for t in b.tiles]
    assert len({t.id for t in a.tiles}) == 9
    np.testing.assert_array_equal(a.image, b.image)


def test_generate_mosaic_rejects_tiny_tiles() -> None:
    with pytest.raises(ValueError):
        generate_mosaic(size=3, tile_side=2)


def test_render_bitmap() -> None:
    bitmap = np.array([[True, False], [False, True]])
    assert render_bitmap(bitmap) == "#.\n.#"
    highlight = np.array([[True, False], [False, False]])
    assert render_bitmap(bitmap, highlight) == "O.\n.#"


def test_bitmap_to_rgb_colors() -> None:
    bitmap = np.array([[True, False], [True, True]])
    highlight = np.array([[False, False], [False, True]])
    image = bitmap_to_rgb(bitmap, highlight)
    assert image.shape == (2, 2, 3)
    assert image.dtype == np.uint8
    assert tuple(image[0, 0]) == SET_COLOR
    assert tuple(image[0, 1]) == CLEAR_COLOR
    assert tuple(image[1, 1]) == HIGHLIGHT_COLOR


def test_shuffle_tiles(example_tiles) -> None:
    shuffled, order = shuffle_tiles(example_tiles, seed=3)
    assert sorted(order.tolist()) == list(range(9))
    assert [t.id for t in shuffled] == [example_tiles[i].id for i in order]
