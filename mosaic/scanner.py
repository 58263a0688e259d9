"""Marker pattern search over a composite bitmap in every orientation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .errors import FormatError
from .orientation import ORIENTATIONS, Orientation

MARKED_CELL = "#"
WILDCARD_CELL = " "

SEA_MONSTER_LINES = (
    "                  # ",
    "#    ##    ##    ###",
    " #  #  #  #  #  #   ",
)


@dataclass(frozen=True, eq=False)
class Pattern:
    """Rectangular template; only marked cells are checked."""

    mask: np.ndarray

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Pattern":
        """Parse ``#``/space rows, padding short rows with wildcards."""
        rows = [line.rstrip("\n") for line in lines]
        while rows and not rows[-1].strip():
            rows.pop()
        if not rows:
            raise FormatError("pattern has no rows")
        width = max(len(row) for row in rows)
        mask = np.zeros((len(rows), width), dtype=bool)
        for r, row in enumerate(rows):
            for c, char in enumerate(row):
                if char == MARKED_CELL:
                    mask[r, c] = True
                elif char != WILDCARD_CELL:
                    raise FormatError(f"pattern row {r}: invalid character {char!r}")
        mask.setflags(write=False)
        return cls(mask=mask)

    @property
    def shape(self) -> Tuple[int, int]:
        return int(self.mask.shape[0]), int(self.mask.shape[1])

    @property
    def marked_cells(self) -> int:
        return int(self.mask.sum())


SEA_MONSTER = Pattern.from_lines(SEA_MONSTER_LINES)


def _hits(bitmap: np.ndarray, pattern: Pattern) -> np.ndarray:
    """Boolean map of top-left offsets where every marked cell lands on a set cell."""
    h, w = pattern.shape
    if bitmap.shape[0] < h or bitmap.shape[1] < w:
        return np.zeros((0, 0), dtype=bool)
    windows = sliding_window_view(np.asarray(bitmap, dtype=bool), (h, w))
    return np.all(windows[:, :, pattern.mask], axis=-1)


def find_matches(bitmap: np.ndarray, pattern: Pattern) -> List[Tuple[int, int]]:
    """Return ``(row, col)`` offsets of every match; overlaps included."""
    return [(int(r), int(c)) for r, c in np.argwhere(_hits(bitmap, pattern))]


def count_matches(bitmap: np.ndarray, pattern: Pattern) -> int:
    return int(_hits(bitmap, pattern).sum())


def best_orientation(bitmap: np.ndarray, pattern: Pattern) -> Tuple[Orientation, int]:
    """Return the first orientation with the highest match count, and that count."""
    best = ORIENTATIONS[0]
    best_count = -1
    for orientation in ORIENTATIONS:
        count = count_matches(orientation.apply(bitmap), pattern)
        if count > best_count:
            best, best_count = orientation, count
    return best, best_count


def best_orientation_matches(bitmap: np.ndarray, pattern: Pattern) -> int:
    return best_orientation(bitmap, pattern)[1]


def roughness(bitmap: np.ndarray, pattern: Pattern) -> int:
    """Set cells left once the best orientation's matches are subtracted.

    Assumes matches in the best orientation do not overlap.
    """
    matches = best_orientation_matches(bitmap, pattern)
    return int(np.count_nonzero(bitmap)) - matches * pattern.marked_cells


def highlight_matches(bitmap: np.ndarray, pattern: Pattern) -> Tuple[np.ndarray, np.ndarray]:
    """Return the bitmap in its best orientation and a mask of matched cells."""
    orientation, _ = best_orientation(bitmap, pattern)
    oriented = orientation.apply(bitmap)
    covered = np.zeros(oriented.shape, dtype=bool)
    h, w = pattern.shape
    for r, c in find_matches(oriented, pattern):
        covered[r : r + h, c : c + w] |= pattern.mask
    return oriented, covered
