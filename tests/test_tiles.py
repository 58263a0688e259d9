"""Tests for tile parsing and border fingerprints."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.errors import FormatError
from mosaic.orientation import ORIENTATIONS, Orientation
from mosaic.tiles import Side, Tile, TileParser, pack_bits

TILE_1753 = [
    "Tile 1753:",
    "..#..#..##",
    "##.......#",
    ".#...#....",
    "#.##....##",
    "#....#...#",
    "......#...",
    ".....#....",
    "......#..#",
    "..##...#.#",
    "##.#.#.##.",
]


def _pack(text: str) -> int:
    return pack_bits(ch == "#" for ch in text)


def test_pack_bits_most_significant_first() -> None:
    assert _pack("..#..#..##") == 0b0010010011
    assert pack_bits([]) == 0
    assert pack_bits([True, False, False]) == 4


def test_edges_forward_then_reversed() -> None:
    tile = TileParser().parse_block(TILE_1753)
    assert tile.id == 1753
    assert tile.edges == (
        _pack("..#..#..##"),
        _pack("##.#.#.##."),
        _pack(".#.##....#"),
        _pack("##.##..##."),
        _pack("##..#..#.."),
        _pack(".##.#.#.##"),
        _pack("#....##.#."),
        _pack(".##..##.##"),
    )
    assert tile.edge(Side.LEFT) == _pack(".#.##....#")


def test_parse_example_file(example_tiles) -> None:
    assert len(example_tiles) == 9
    assert all(tile.side == 10 for tile in example_tiles)
    assert example_tiles[0].id == 2311
    assert example_tiles[0].to_rows()[0] == "..##.#..#."


def test_tile_content_is_read_only() -> None:
    tile = TileParser().parse_block(TILE_1753)
    with pytest.raises(ValueError):
        tile.content[0, 0] = True


def test_oriented_returns_new_tile(example_tiles) -> None:
    tile = example_tiles[0]
    before = tile.content.copy()
    turned = tile.oriented(Orientation(rotations=1))
    assert turned is not tile
    assert turned.id == tile.id
    np.testing.assert_array_equal(tile.content, before)
    np.testing.assert_array_equal(turned.content, np.rot90(before, k=-1))


def test_orientations_permute_the_same_fingerprints(example_tiles) -> None:
    """Every orientation exposes a subset of the unrotated tile's 8 fingerprints."""
    tile = example_tiles[1]
    for o in ORIENTATIONS:
        assert set(tile.oriented(o).edges) == set(tile.edges)


def test_cropped_removes_border_ring(example_tiles) -> None:
    tile = example_tiles[0]
    inner = tile.cropped()
    assert inner.side == 8
    np.testing.assert_array_equal(inner.content, tile.content[1:-1, 1:-1])


def test_invalid_character_raises() -> None:
    block = list(TILE_1753)
    block[3] = ".#...x...."
    with pytest.raises(FormatError, match="invalid character"):
        TileParser().parse_block(block)


def test_wrong_row_length_raises() -> None:
    block = list(TILE_1753)
    block[2] = "##......#"
    with pytest.raises(FormatError, match="row 1"):
        TileParser().parse_block(block)


def test_wrong_row_count_raises() -> None:
    with pytest.raises(FormatError):
        TileParser().parse_block(TILE_1753[:-1])


def test_missing_id_raises() -> None:
    block = ["Tile:"] + TILE_1753[1:]
    with pytest.raises(FormatError, match="numeric id"):
        TileParser().parse_block(block)


def test_mixed_tile_sides_raise() -> None:
    text = "\n".join(TILE_1753) + "\n\nTile 7:\n#.#\n...\n#.#\n"
    with pytest.raises(FormatError, match="expected 10"):
        TileParser().parse(text)


def test_parse_ignores_extra_blank_lines() -> None:
    text = "\n\n" + "\n".join(TILE_1753) + "\n\n\nTile 8:\n" + "\n".join(TILE_1753[1:]) + "\n\n"
    tiles = TileParser().parse(text)
    assert [t.id for t in tiles] == [1753, 8]


def test_from_content_requires_square() -> None:
    with pytest.raises(FormatError, match="square"):
        Tile.from_content(1, np.zeros((3, 4), dtype=bool))
