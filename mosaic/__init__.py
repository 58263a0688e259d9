"""Square tile mosaic assembly and marker pattern search package."""

from .errors import FormatError, InconsistentInputError, MosaicError, UnsolvableError
from .evaluator import EvaluationResult, MosaicEvaluator
from .matcher import Direction, EdgeIndex, EdgeMatcher, corner_product, find_corners
from .orientation import ORIENTATIONS, Orientation, reflect, rotate90
from .scanner import SEA_MONSTER, Pattern, best_orientation_matches, count_matches, roughness
from .solver import AssemblyResult, MosaicGrid, MosaicSolver, Placement, SolverConfig
from .tiles import Side, Tile, TileParser
from .utils import compose_bitmap, generate_mosaic

__all__ = [
    "MosaicError",
    "FormatError",
    "InconsistentInputError",
    "UnsolvableError",
    "Orientation",
    "ORIENTATIONS",
    "rotate90",
    "reflect",
    "Side",
    "Tile",
    "TileParser",
    "Direction",
    "EdgeIndex",
    "EdgeMatcher",
    "find_corners",
    "corner_product",
    "SolverConfig",
    "Placement",
    "MosaicGrid",
    "AssemblyResult",
    "MosaicSolver",
    "compose_bitmap",
    "generate_mosaic",
    "Pattern",
    "SEA_MONSTER",
    "count_matches",
    "best_orientation_matches",
    "roughness",
    "EvaluationResult",
    "MosaicEvaluator",
]
