"""Assemble a tile mosaic from a text file and report corner and roughness values."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from mosaic.errors import MosaicError
from mosaic.evaluator import MosaicEvaluator
from mosaic.scanner import SEA_MONSTER, Pattern, highlight_matches
from mosaic.solver import SolverConfig
from mosaic.tiles import TileParser
from mosaic.utils import bitmap_to_rgb


def load_pattern(path: Path | None) -> Pattern:
    """Read a pattern file, or fall back to the sea monster."""
    if path is None:
        return SEA_MONSTER
    return Pattern.from_lines(path.read_text().splitlines())


def save_image(path: Path, image: np.ndarray) -> None:
    """Save RGB image to disk."""
    import matplotlib.pyplot as plt

    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, image)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Assemble a tile mosaic and scan it for a pattern.")
    parser.add_argument("input", help="Path to the tile file")
    parser.add_argument("--pattern", default=None, help="Optional pattern file (default: sea monster)")
    parser.add_argument(
        "--output",
        default=None,
        help="Optional output path for the composite image (default: do not save)",
    )
    parser.add_argument(
        "--max-expansions",
        type=int,
        default=None,
        help="Abort the assembly search after this many placements (default: unlimited)",
    )
    parser.add_argument(
        "--all-starts",
        action="store_true",
        help="Try every tile at the top-left cell instead of only corner tiles",
    )
    parser.add_argument("--show", action="store_true", help="Display the composite image")
    parser.add_argument("--verbose", action="store_true", help="Log search progress")
    return parser.parse_args()


def main() -> None:
    """Run assembly pipeline from tile file to the two reported values."""
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else None
    config = SolverConfig(
        use_corner_starts=not args.all_starts,
        max_expansions=args.max_expansions,
    )

    try:
        tiles = TileParser().parse(input_path.read_text())
        pattern = load_pattern(Path(args.pattern) if args.pattern else None)
        result = MosaicEvaluator(config).evaluate(tiles, pattern)
    except MosaicError as exc:
        raise SystemExit(f"error: {exc}") from exc

    print(f"Tiles: {len(tiles)} ({result.grid.size}x{result.grid.size})")
    print(f"Corner tiles: {result.corner_ids}")
    print(f"Corner product: {result.corner_product}")
    print(f"Pattern matches: {result.pattern_matches} (orientation {result.orientation})")
    print(f"Roughness: {result.roughness}")
    print("Assembled grid ids:")
    print(result.grid.tile_ids())

    if output_path is None and not args.show:
        return

    oriented, covered = highlight_matches(result.bitmap, pattern)
    image = bitmap_to_rgb(oriented, covered)
    if output_path is not None:
        save_image(output_path, image)
        print(f"Output image: {output_path.resolve()}")

    if args.show:
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(6, 6))
        ax.imshow(image, interpolation="nearest")
        ax.set_title(f"Composite ({result.pattern_matches} matches)")
        ax.axis("off")
        plt.tight_layout()
        plt.show()


if __name__ == "__main__":
    main()
