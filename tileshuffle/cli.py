"""Command-line interface: shuffle or reconstruct the tiles of an image file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .errors import TileShuffleError
from .image_io import crop_to_grid, load_image, save_image
from .permutation import PermutationSource
from .pipeline import decode_image, encode_image
from .reconstructor import ReconstructorConfig


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("split counts must be non-zero positive integers")
    return number


def determine_output_path(input_path: Path, output: Optional[Path], suffix: str) -> Path:
    """Resolve where the result is written.

    Without `output`, `<stem><suffix>.png` goes beside the input; when `output`
    is an existing directory, that name goes inside it; otherwise `output` is
    used as given.
    """
    output_name = f"{input_path.stem}{suffix}.png"
    if output is None:
        return input_path.with_name(output_name)
    if output.is_dir():
        return output / output_name
    return output


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", type=Path, help="Path to the input image")
    parser.add_argument("x_split", type=positive_int, help="Number of tile columns")
    parser.add_argument("y_split", type=positive_int, help="Number of tile rows")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output file or directory")
    parser.add_argument(
        "--crop",
        action="store_true",
        help="Centre-crop the input to a size divisible by the grid before tiling",
    )
    parser.add_argument(
        "--show", action="store_true", help="Display input and output images side by side"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with `encode` and `decode` subcommands."""
    parser = argparse.ArgumentParser(
        prog="tileshuffle", description="Slice an image into tiles and shuffle or unshuffle them."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    encode = sub.add_parser("encode", help="Shuffle the tiles of an image")
    _add_common_args(encode)
    encode.add_argument(
        "--seed", type=int, default=None, help="Seed for a reproducible shuffle (default: OS entropy)"
    )

    decode = sub.add_parser("decode", help="Reconstruct a shuffled image")
    _add_common_args(decode)
    decode.add_argument(
        "--workers", type=positive_int, default=None, help="Search threads (default: CPU count)"
    )
    return parser


def _show(before: np.ndarray, after: np.ndarray, title: str) -> None:
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    axes[0].imshow(before)
    axes[0].set_title("Input")
    axes[1].imshow(after)
    axes[1].set_title(title)
    for ax in axes:
        ax.axis("off")
    plt.tight_layout()
    plt.show()


def run(args: argparse.Namespace) -> int:
    """Execute one parsed command; return the process exit code."""
    suffix = "_encoded" if args.command == "encode" else "_decoded"
    output = determine_output_path(args.input, args.output, suffix)

    print(f'From: "{args.input}"', file=sys.stderr)
    print(f'To: "{output}"', file=sys.stderr)

    try:
        image = load_image(args.input)
        if args.crop:
            image = crop_to_grid(image, args.x_split, args.y_split)
        if args.command == "encode":
            source = (
                PermutationSource.from_seed(args.seed)
                if args.seed is not None
                else PermutationSource.from_entropy()
            )
            result = encode_image(image, args.x_split, args.y_split, source=source)
        else:
            config = ReconstructorConfig(workers=args.workers)
            result = decode_image(image, args.x_split, args.y_split, config=config)
        save_image(output, result)
    except TileShuffleError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.show:
        _show(image, result, "Encoded" if args.command == "encode" else "Decoded")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the `tileshuffle` console script."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
