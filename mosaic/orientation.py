"""Dihedral group of square-grid orientations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


def rotate90(content: np.ndarray) -> np.ndarray:
    """Rotate a square grid 90 degrees clockwise."""
    return np.rot90(content, k=-1)


def reflect(content: np.ndarray) -> np.ndarray:
    """Mirror a square grid left-to-right."""
    return np.fliplr(content)


@dataclass(frozen=True)
class Orientation:
    """Element of D4 written as ``reflect^reflected . rotate90^rotations``.

    Applying an orientation rotates the content clockwise ``rotations``
    times and then mirrors it if ``reflected`` is set.
    """

    rotations: int = 0
    reflected: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.rotations < 4:
            raise ValueError(f"rotations must be in 0..3, got {self.rotations}")

    @property
    def index(self) -> int:
        return self.rotations + (4 if self.reflected else 0)

    def apply(self, content: np.ndarray) -> np.ndarray:
        """Return a new grid with this orientation applied."""
        out = content
        for _ in range(self.rotations):
            out = rotate90(out)
        if self.reflected:
            out = reflect(out)
        return np.ascontiguousarray(out)

    def compose(self, other: "Orientation") -> "Orientation":
        """Return ``self . other``: apply ``other`` first, then ``self``."""
        # reflect . rotate90 = rotate270 . reflect, so a reflection in
        # ``other`` flips the direction of ``self``'s rotations.
        sign = -1 if other.reflected else 1
        return Orientation(
            rotations=(other.rotations + sign * self.rotations) % 4,
            reflected=self.reflected != other.reflected,
        )

    def inverse(self) -> "Orientation":
        if self.reflected:
            return self
        return Orientation(rotations=(-self.rotations) % 4)

    def __str__(self) -> str:
        name = f"rot{90 * self.rotations}"
        return f"reflect*{name}" if self.reflected else name


IDENTITY = Orientation()
ROTATE90 = Orientation(rotations=1)
REFLECT = Orientation(reflected=True)


def _generate_group() -> Tuple[Orientation, ...]:
    """Enumerate D4 as the four rotation powers, then each followed by a reflection."""
    rotations = [IDENTITY]
    while True:
        nxt = ROTATE90.compose(rotations[-1])
        if nxt == IDENTITY:
            break
        rotations.append(nxt)
    return tuple(rotations) + tuple(REFLECT.compose(r) for r in rotations)


ORIENTATIONS: Tuple[Orientation, ...] = _generate_group()
