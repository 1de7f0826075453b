"""Evaluation metrics for reconstruction quality."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .grid import GridGeometry
from .matcher import BorderMatcher


@dataclass
class EvaluationResult:
    """Container for reconstruction metrics."""

    position_accuracy: float
    neighbor_accuracy: float
    total_cost: int


class PuzzleEvaluator:
    """Compare a decode permutation with the encode permutation it should undo.

    The shuffled image holds original tile `encoded[s]` at slot `s`, so after
    decoding, destination `d` shows original tile `encoded[decoded[d]]`.
    """

    def __init__(self) -> None:
        self.matcher = BorderMatcher()

    @staticmethod
    def _restored_origins(encoded: np.ndarray, decoded: np.ndarray) -> np.ndarray:
        return np.asarray(encoded)[np.asarray(decoded)]

    def compute_position_accuracy(self, encoded: np.ndarray, decoded: np.ndarray) -> float:
        """Fraction of tiles restored to their original cell."""
        origins = self._restored_origins(encoded, decoded)
        total = origins.shape[0]
        correct = int(np.count_nonzero(origins == np.arange(total)))
        return correct / total if total else 0.0

    def compute_neighbor_accuracy(
        self, encoded: np.ndarray, decoded: np.ndarray, geometry: GridGeometry
    ) -> float:
        """Fraction of right/down neighbors that were neighbors in the original."""
        rows, cols = geometry.y_split, geometry.x_split
        grid = self._restored_origins(encoded, decoded).reshape(rows, cols)
        correct = 0
        total = 0

        for r in range(rows):
            for c in range(cols):
                cur_row, cur_col = divmod(int(grid[r, c]), cols)
                if c + 1 < cols:
                    total += 1
                    if cur_col + 1 < cols and int(grid[r, c + 1]) == cur_row * cols + cur_col + 1:
                        correct += 1
                if r + 1 < rows:
                    total += 1
                    if int(grid[r + 1, c]) == (cur_row + 1) * cols + cur_col:
                        correct += 1

        return correct / total if total else 0.0

    def evaluate(
        self,
        shuffled: np.ndarray,
        geometry: GridGeometry,
        encoded: np.ndarray,
        decoded: np.ndarray,
    ) -> EvaluationResult:
        """Calculate all metrics for one decode of `shuffled`."""
        cost = self.matcher.build_cost_matrix(geometry.tile_views(shuffled))
        grid = np.asarray(decoded).reshape(geometry.y_split, geometry.x_split)
        return EvaluationResult(
            position_accuracy=self.compute_position_accuracy(encoded, decoded),
            neighbor_accuracy=self.compute_neighbor_accuracy(encoded, decoded, geometry),
            total_cost=self.matcher.total_grid_cost(grid, cost),
        )
