"""Recover a tile arrangement from a shuffled image by multi-start greedy search."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .grid import GridGeometry
from .matcher import BorderMatcher, CostAxis

logger = logging.getLogger(__name__)


@dataclass
class ReconstructorConfig:
    """Configuration for the reconstruction search."""

    workers: Optional[int] = None
    min_parallel_tiles: int = 16


@dataclass
class Candidate:
    """One greedy assembly grown from a fixed top-left tile."""

    start: int
    permutation: np.ndarray
    cost: int


class Reconstructor:
    """Search for the tile arrangement with the least border discontinuity.

    Every tile is tried as the top-left start. From there the grid is filled in
    row-major order: a first-column cell takes the available tile that best
    continues the tile above it, any other cell the one that best continues the
    tile to its left. The complete assembly with the lowest global seam cost
    wins. Ties go to the lowest tile index and then to the lowest start, so the
    result does not depend on the number of workers.
    """

    def __init__(self, config: Optional[ReconstructorConfig] = None) -> None:
        self.config = config if config is not None else ReconstructorConfig()
        self.matcher = BorderMatcher()

    def reconstruct(self, image: np.ndarray, geometry: GridGeometry) -> np.ndarray:
        """Return the best-found permutation (destination index -> source index)."""
        best = min(self.candidates(image, geometry), key=lambda c: (c.cost, c.start))
        logger.info(f"Best start tile {best.start} with global cost {best.cost}")
        return best.permutation

    def candidates(self, image: np.ndarray, geometry: GridGeometry) -> List[Candidate]:
        """Assemble and score one candidate per start tile, in start order."""
        tiles = geometry.tile_views(image)
        cost = self.matcher.build_cost_matrix(tiles)
        n = geometry.total_tiles

        workers = self._effective_workers(n)
        logger.debug(f"Evaluating {n} start tiles on {workers} worker(s)")
        if workers <= 1:
            return self._evaluate_starts(range(n), cost, geometry)

        chunks = [chunk.tolist() for chunk in np.array_split(np.arange(n), workers)]
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futs = [ex.submit(self._evaluate_starts, chunk, cost, geometry) for chunk in chunks]
            # Collected in submission order, so results stay sorted by start.
            results: List[Candidate] = []
            for fut in futs:
                results.extend(fut.result())
        return results

    def _effective_workers(self, total_tiles: int) -> int:
        if total_tiles < self.config.min_parallel_tiles:
            return 1
        workers = self.config.workers or os.cpu_count() or 1
        return max(1, min(workers, total_tiles))

    def _evaluate_starts(
        self, starts: Sequence[int], cost: np.ndarray, geometry: GridGeometry
    ) -> List[Candidate]:
        grids = self._greedy_assemblies(cost, geometry, starts)
        vertical = cost[grids[:, :-1, :], grids[:, 1:, :], CostAxis.DOWN].sum(axis=(1, 2))
        horizontal = cost[grids[:, :, :-1], grids[:, :, 1:], CostAxis.RIGHT].sum(axis=(1, 2))
        totals = vertical + horizontal
        return [
            Candidate(start=int(start), permutation=grids[k].reshape(-1), cost=int(totals[k]))
            for k, start in enumerate(starts)
        ]

    def _greedy_assemblies(
        self, cost: np.ndarray, geometry: GridGeometry, starts: Sequence[int]
    ) -> np.ndarray:
        """Fill one `(y_split, x_split)` grid of source indices per start tile.

        All starts in the batch advance cell by cell together, so each step is a
        single `(len(starts), n)` numpy operation. Every start keeps its own
        row of the availability mask.
        """
        rows, cols = geometry.y_split, geometry.x_split
        n = rows * cols
        k = len(starts)
        batch = np.arange(k)
        grids = np.full((k, rows, cols), -1, dtype=np.intp)
        available = np.ones((k, n), dtype=bool)

        start_idx = np.asarray(starts, dtype=np.intp)
        grids[:, 0, 0] = start_idx
        available[batch, start_idx] = False
        taken = np.iinfo(cost.dtype).max

        for r in range(rows):
            for c in range(cols):
                if r == 0 and c == 0:
                    continue
                if c == 0:
                    scores = cost[grids[:, r - 1, 0], :, CostAxis.DOWN]
                else:
                    scores = cost[grids[:, r, c - 1], :, CostAxis.RIGHT]
                scores = np.where(available, scores, taken)
                # argmin returns the first minimum, i.e. the lowest tile index.
                choice = np.argmin(scores, axis=1)
                grids[:, r, c] = choice
                available[batch, choice] = False

        return grids


def reconstruct(
    image: np.ndarray, geometry: GridGeometry, workers: Optional[int] = None
) -> np.ndarray:
    """Run the reconstruction search with default settings."""
    return Reconstructor(ReconstructorConfig(workers=workers)).reconstruct(image, geometry)
