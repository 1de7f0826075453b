"""Benchmark reconstruction quality and runtime across grid sizes."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import sys
import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tileshuffle.evaluator import PuzzleEvaluator
from tileshuffle.grid import geometry_for_image
from tileshuffle.permutation import PermutationSource
from tileshuffle.pipeline import decode_with_permutation, encode_with_permutation
from tileshuffle.reconstructor import ReconstructorConfig
from tileshuffle.utils import (
    generate_gradient_image,
    generate_natural_like_image,
    generate_random_image,
)

TILE_SIZE = 40

IMAGE_KINDS: Dict[str, Callable[[int, int], np.ndarray]] = {
    "natural": lambda side, seed: generate_natural_like_image(width=side, height=side, seed=seed),
    "random": lambda side, seed: generate_random_image(width=side, height=side, seed=seed),
    "gradient": lambda side, seed: generate_gradient_image(width=side, height=side),
}


@dataclass
class BenchmarkRow:
    grid: str
    seeds: int
    pos_acc_mean: float
    pos_acc_min: float
    nbr_acc_mean: float
    nbr_acc_min: float
    total_cost_mean: float
    runtime_mean_sec: float


@dataclass
class CaseResult:
    position_accuracy: float
    neighbor_accuracy: float
    total_cost: int
    runtime_sec: float


def run_case(grid_size: int, seed: int, kind: str, workers: Optional[int]) -> CaseResult:
    image = IMAGE_KINDS[kind](grid_size * TILE_SIZE, seed)
    source = PermutationSource.from_seed(seed)
    shuffled, encoded = encode_with_permutation(image, grid_size, grid_size, source=source)

    t0 = time.perf_counter()
    _, decoded = decode_with_permutation(
        shuffled, grid_size, grid_size, config=ReconstructorConfig(workers=workers)
    )
    runtime_sec = time.perf_counter() - t0

    geometry = geometry_for_image(shuffled, grid_size, grid_size)
    result = PuzzleEvaluator().evaluate(shuffled, geometry, encoded, decoded)
    return CaseResult(
        position_accuracy=result.position_accuracy,
        neighbor_accuracy=result.neighbor_accuracy,
        total_cost=result.total_cost,
        runtime_sec=runtime_sec,
    )


def run_case_multi_seed(
    grid_size: int, seeds: List[int], kind: str, workers: Optional[int]
) -> BenchmarkRow:
    cases = [run_case(grid_size, seed=seed, kind=kind, workers=workers) for seed in seeds]

    pos = np.array([c.position_accuracy for c in cases], dtype=np.float64)
    nbr = np.array([c.neighbor_accuracy for c in cases], dtype=np.float64)
    cst = np.array([c.total_cost for c in cases], dtype=np.float64)
    rt = np.array([c.runtime_sec for c in cases], dtype=np.float64)
    return BenchmarkRow(
        grid=f"{grid_size}x{grid_size}",
        seeds=len(seeds),
        pos_acc_mean=float(np.mean(pos)),
        pos_acc_min=float(np.min(pos)),
        nbr_acc_mean=float(np.mean(nbr)),
        nbr_acc_min=float(np.min(nbr)),
        total_cost_mean=float(np.mean(cst)),
        runtime_mean_sec=float(np.mean(rt)),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the tile reconstruction benchmark.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[3, 5, 8, 10],
        help="Grid sizes to benchmark (default: 3 5 8 10)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=1,
        help="Number of seeds to evaluate per grid (default: 1)",
    )
    parser.add_argument(
        "--kind",
        choices=sorted(IMAGE_KINDS),
        default="natural",
        help="Synthetic image type (default: natural)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Search threads (default: CPU count)",
    )
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Grid':<8}{'Seeds':>7}{'PosMean':>10}{'PosMin':>10}"
        f"{'NbrMean':>10}{'NbrMin':>10}{'CostMean':>14}{'RtMean(s)':>11}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.grid:<8}"
            f"{row.seeds:>7d}"
            f"{row.pos_acc_mean:>10.4f}"
            f"{row.pos_acc_min:>10.4f}"
            f"{row.nbr_acc_mean:>10.4f}"
            f"{row.nbr_acc_min:>10.4f}"
            f"{row.total_cost_mean:>14.1f}"
            f"{row.runtime_mean_sec:>11.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [
        run_case_multi_seed(size, seeds=seeds, kind=args.kind, workers=args.workers)
        for size in args.sizes
    ]
    print_table(rows)


if __name__ == "__main__":
    main()
