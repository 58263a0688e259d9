"""Shared fixtures for mosaic tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from mosaic.tiles import Tile, TileParser

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def example_tiles() -> List[Tile]:
    """The nine 10x10 reference tiles."""
    return TileParser().parse((DATA_DIR / "example_tiles.txt").read_text())
