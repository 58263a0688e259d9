"""Tile records, border fingerprints and tile text parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import FormatError
from .orientation import Orientation

SET_CELL = "#"
CLEAR_CELL = "."

_ID_PATTERN = re.compile(r"\d+")


class Side(IntEnum):
    """Tile borders, in fingerprint order."""

    TOP = 0
    BOTTOM = 1
    LEFT = 2
    RIGHT = 3


def pack_bits(cells: Iterable[bool]) -> int:
    """Pack a border into an integer, first cell as the most significant bit."""
    value = 0
    for cell in cells:
        value = (value << 1) | int(bool(cell))
    return value


def _border(content: np.ndarray, side: Side) -> np.ndarray:
    if side == Side.TOP:
        return content[0, :]
    if side == Side.BOTTOM:
        return content[-1, :]
    if side == Side.LEFT:
        return content[:, 0]
    if side == Side.RIGHT:
        return content[:, -1]
    raise ValueError(f"Unsupported side: {side}")


def compute_edges(content: np.ndarray) -> Tuple[int, ...]:
    """Return top/bottom/left/right fingerprints followed by their reversals.

    Rows read left to right and columns top to bottom, so two tiles sit
    side by side iff ``left.edges[RIGHT] == right.edges[LEFT]``.
    """
    borders = [_border(content, side) for side in Side]
    forward = [pack_bits(b) for b in borders]
    reverse = [pack_bits(b[::-1]) for b in borders]
    return tuple(forward + reverse)


@dataclass(frozen=True, eq=False)
class Tile:
    """A square tile with its cells and precomputed border fingerprints."""

    id: int
    content: np.ndarray
    edges: Tuple[int, ...]

    @classmethod
    def from_content(cls, tile_id: int, content: np.ndarray) -> "Tile":
        """Create a read-only tile and fingerprint its 4 borders."""
        cells = np.array(content, dtype=bool)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise FormatError(f"tile {tile_id}: content must be square, got shape {cells.shape}")
        cells.setflags(write=False)
        return cls(id=int(tile_id), content=cells, edges=compute_edges(cells))

    @classmethod
    def from_rows(cls, tile_id: int, rows: Sequence[str]) -> "Tile":
        side = len(rows)
        content = np.zeros((side, side), dtype=bool)
        for r, row in enumerate(rows):
            if len(row) != side:
                raise FormatError(
                    f"tile {tile_id}: row {r} has {len(row)} cells, expected {side}"
                )
            for c, char in enumerate(row):
                if char == SET_CELL:
                    content[r, c] = True
                elif char != CLEAR_CELL:
                    raise FormatError(f"tile {tile_id}: invalid character {char!r} at row {r}")
        return cls.from_content(tile_id, content)

    @property
    def side(self) -> int:
        return int(self.content.shape[0])

    def edge(self, side: Side) -> int:
        return self.edges[side]

    def oriented(self, orientation: Orientation) -> "Tile":
        """Return a new tile with the same id and transformed content."""
        return Tile.from_content(self.id, orientation.apply(self.content))

    def cropped(self) -> "Tile":
        """Drop the outermost ring of cells."""
        if self.side < 3:
            raise ValueError(f"tile {self.id} is too small to crop")
        return Tile.from_content(self.id, self.content[1:-1, 1:-1])

    def to_rows(self) -> List[str]:
        return ["".join(SET_CELL if cell else CLEAR_CELL for cell in row) for row in self.content]


class TileParser:
    """Parse blank-line separated tile blocks into `Tile` records."""

    def parse(self, text: str) -> List[Tile]:
        return self.parse_lines(text.splitlines())

    def parse_lines(self, lines: Iterable[str]) -> List[Tile]:
        """Split lines into blocks and parse each into a tile of uniform side."""
        tiles: List[Tile] = []
        side: Optional[int] = None
        for block in self._blocks(lines):
            tile = self.parse_block(block)
            if side is None:
                side = tile.side
            elif tile.side != side:
                raise FormatError(f"tile {tile.id}: side {tile.side}, expected {side}")
            tiles.append(tile)
        return tiles

    def parse_block(self, block: Sequence[str]) -> Tile:
        header, rows = block[0], list(block[1:])
        match = _ID_PATTERN.search(header)
        if match is None:
            raise FormatError(f"tile header has no numeric id: {header!r}")
        if not rows:
            raise FormatError(f"tile {match.group()} has no rows")
        return Tile.from_rows(int(match.group()), rows)

    @staticmethod
    def _blocks(lines: Iterable[str]) -> List[List[str]]:
        blocks: List[List[str]] = []
        current: List[str] = []
        for line in lines:
            line = line.rstrip()
            if not line:
                if current:
                    blocks.append(current)
                    current = []
                continue
            current.append(line)
        if current:
            blocks.append(current)
        return blocks
