"""Seam dissimilarity between tiles and pairwise cost matrix computation."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import List

import numpy as np


class Direction(Enum):
    """Which edge of the first tile faces the second tile."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class CostAxis(IntEnum):
    """Last-axis index of a precomputed cost matrix."""

    RIGHT = 0
    DOWN = 1


def _border(tile: np.ndarray, side: Direction) -> np.ndarray:
    if side == Direction.UP:
        return tile[0, :, :]
    if side == Direction.DOWN:
        return tile[-1, :, :]
    if side == Direction.LEFT:
        return tile[:, 0, :]
    if side == Direction.RIGHT:
        return tile[:, -1, :]
    raise ValueError(f"Unsupported direction: {side}")


def border_cost(tile_a: np.ndarray, tile_b: np.ndarray, direction: Direction) -> int:
    """Sum of per-channel absolute differences along the seam between two tiles.

    `direction` names the edge of `tile_a` that is compared with the opposite
    edge of `tile_b`; `Direction.DOWN` scores `tile_b` placed directly below
    `tile_a`.
    """
    assert tile_a.shape == tile_b.shape, "tiles must share the same dimensions"
    edge_a = _border(tile_a, direction).astype(np.int64)
    edge_b = _border(tile_b, direction.opposite()).astype(np.int64)
    return int(np.abs(edge_a - edge_b).sum())


class BorderMatcher:
    """Cache seam costs for every ordered pair of tiles."""

    def build_cost_matrix(self, tiles: List[np.ndarray]) -> np.ndarray:
        """Build pairwise directional costs: `cost[i, j, axis]`.

        `cost[i, j, CostAxis.RIGHT]` equals `border_cost(tiles[i], tiles[j], RIGHT)`
        and likewise for DOWN.
        """
        n = len(tiles)
        if n == 0:
            return np.zeros((0, 0, 2), dtype=np.int64)
        shape = tiles[0].shape
        for tile in tiles:
            assert tile.shape == shape, "tiles must share the same dimensions"

        rights = np.stack([_border(t, Direction.RIGHT) for t in tiles]).astype(np.int64)
        lefts = np.stack([_border(t, Direction.LEFT) for t in tiles]).astype(np.int64)
        bottoms = np.stack([_border(t, Direction.DOWN) for t in tiles]).astype(np.int64)
        tops = np.stack([_border(t, Direction.UP) for t in tiles]).astype(np.int64)

        cost = np.empty((n, n, 2), dtype=np.int64)
        for i in range(n):
            cost[i, :, CostAxis.RIGHT] = np.abs(lefts - rights[i]).sum(axis=(1, 2))
            cost[i, :, CostAxis.DOWN] = np.abs(tops - bottoms[i]).sum(axis=(1, 2))
        return cost

    def total_grid_cost(self, grid: np.ndarray, cost: np.ndarray) -> int:
        """Sum of every right and down adjacency cost in an assembled grid."""
        vertical = cost[grid[:-1, :], grid[1:, :], CostAxis.DOWN]
        horizontal = cost[grid[:, :-1], grid[:, 1:], CostAxis.RIGHT]
        return int(vertical.sum()) + int(horizontal.sum())
