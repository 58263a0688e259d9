"""Demo script for synthetic tile mosaic assembly."""

from __future__ import annotations

import argparse
import time

import matplotlib.pyplot as plt

from mosaic.evaluator import MosaicEvaluator
from mosaic.matcher import EdgeIndex, find_corners
from mosaic.solver import MosaicSolver, SolverConfig
from mosaic.utils import bitmap_to_rgb, compose_bitmap, generate_mosaic


def run_demo(grid_size: int = 5, tile_side: int = 16, seed: int = 42) -> None:
    """Generate a scrambled mosaic, assemble it and display source vs. result."""
    mosaic = generate_mosaic(size=grid_size, tile_side=tile_side, seed=seed)
    index = EdgeIndex.build(mosaic.tiles)
    corners = find_corners(mosaic.tiles, index)

    solver = MosaicSolver(SolverConfig())
    start = time.perf_counter()
    result = solver.search(mosaic.tiles, index=index, corners=corners)
    duration = time.perf_counter() - start
    if not result.solved or result.grid is None:
        print(f"Assembly failed: {result.reason}")
        return

    bitmap = compose_bitmap(result.grid, mosaic.tiles)
    evaluator = MosaicEvaluator()
    accuracy = evaluator.compute_neighbor_accuracy(result.grid, mosaic.tiles)

    print(f"Grid size: {grid_size}x{grid_size}, tile side {tile_side}")
    print(f"Corner tiles: {corners}")
    print(f"Seam accuracy: {accuracy:.4f}")
    print(f"Expansions: {result.expansions}")
    print(f"Solve time: {duration:.4f}s")

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    axes[0].imshow(bitmap_to_rgb(mosaic.interior()), interpolation="nearest")
    axes[0].set_title("Source")
    axes[1].imshow(bitmap_to_rgb(bitmap), interpolation="nearest")
    axes[1].set_title("Reconstructed (any orientation)")
    for ax in axes:
        ax.axis("off")
    plt.tight_layout()
    plt.show()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Synthetic tile mosaic assembly demo")
    parser.add_argument("--grid-size", type=int, default=5, help="Mosaic grid size, default=5")
    parser.add_argument("--tile-side", type=int, default=16, help="Tile side in cells, default=16")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    run_demo(grid_size=args.grid_size, tile_side=args.tile_side, seed=args.seed)
