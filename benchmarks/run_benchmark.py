"""Benchmark assembly runtime across mosaic sizes."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

import sys
import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mosaic.evaluator import MosaicEvaluator
from mosaic.matcher import EdgeIndex, find_corners
from mosaic.solver import MosaicSolver, SolverConfig
from mosaic.utils import generate_mosaic


@dataclass
class BenchmarkRow:
    grid: str
    seeds: int
    solved: int
    seam_acc_min: float
    expansions_mean: float
    expansions_max: int
    runtime_mean_sec: float
    runtime_max_sec: float


@dataclass
class CaseResult:
    solved: bool
    seam_accuracy: float
    expansions: int
    runtime_sec: float


def run_case(grid_size: int, tile_side: int, seed: int, use_corner_starts: bool) -> CaseResult:
    mosaic = generate_mosaic(size=grid_size, tile_side=tile_side, seed=seed)
    index = EdgeIndex.build(mosaic.tiles)
    corners = find_corners(mosaic.tiles, index) if use_corner_starts else None
    solver = MosaicSolver(SolverConfig(use_corner_starts=use_corner_starts))

    t0 = time.perf_counter()
    result = solver.search(mosaic.tiles, index=index, corners=corners)
    runtime_sec = time.perf_counter() - t0

    accuracy = 0.0
    if result.solved and result.grid is not None:
        accuracy = MosaicEvaluator().compute_neighbor_accuracy(result.grid, mosaic.tiles)
    return CaseResult(
        solved=result.solved,
        seam_accuracy=accuracy,
        expansions=result.expansions,
        runtime_sec=runtime_sec,
    )


def run_case_multi_seed(
    grid_size: int, tile_side: int, seeds: List[int], use_corner_starts: bool
) -> BenchmarkRow:
    cases = [run_case(grid_size, tile_side, seed, use_corner_starts) for seed in seeds]
    acc = np.array([c.seam_accuracy for c in cases], dtype=np.float64)
    exp = np.array([c.expansions for c in cases], dtype=np.int64)
    rt = np.array([c.runtime_sec for c in cases], dtype=np.float64)
    return BenchmarkRow(
        grid=f"{grid_size}x{grid_size}",
        seeds=len(seeds),
        solved=sum(1 for c in cases if c.solved),
        seam_acc_min=float(np.min(acc)),
        expansions_mean=float(np.mean(exp)),
        expansions_max=int(np.max(exp)),
        runtime_mean_sec=float(np.mean(rt)),
        runtime_max_sec=float(np.max(rt)),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run mosaic assembly benchmark on multiple grid sizes.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[3, 6, 12],
        help="Grid sizes to benchmark (default: 3 6 12)",
    )
    parser.add_argument("--tile-side", type=int, default=24, help="Tile side in cells (default: 24)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=1,
        help="Number of seeds to evaluate per grid (default: 1)",
    )
    parser.add_argument(
        "--all-starts",
        action="store_true",
        help="Seed the search with every tile instead of only corner tiles",
    )
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Grid':<8}{'Seeds':>7}{'Solved':>8}{'SeamMin':>10}"
        f"{'ExpMean':>10}{'ExpMax':>8}{'RtMean(s)':>11}{'RtMax(s)':>10}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.grid:<8}"
            f"{row.seeds:>7d}"
            f"{row.solved:>8d}"
            f"{row.seam_acc_min:>10.4f}"
            f"{row.expansions_mean:>10.1f}"
            f"{row.expansions_max:>8d}"
            f"{row.runtime_mean_sec:>11.4f}"
            f"{row.runtime_max_sec:>10.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [
        run_case_multi_seed(
            size,
            tile_side=args.tile_side,
            seeds=seeds,
            use_corner_starts=not args.all_starts,
        )
        for size in args.sizes
    ]
    print_table(rows)


if __name__ == "__main__":
    main()
