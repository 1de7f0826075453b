"""Grid geometry and tile addressing for RGBA images."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .errors import DimensionMismatchError

logger = logging.getLogger(__name__)

CHANNELS = 4


@dataclass(frozen=True)
class GridGeometry:
    """An `x_split x y_split` partition of a `width x height` image into equal tiles."""

    x_split: int
    y_split: int
    width: int
    height: int
    tile_width: int
    tile_height: int

    @property
    def total_tiles(self) -> int:
        return self.x_split * self.y_split

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Numpy shape of an image buffer matching this geometry."""
        return (self.height, self.width, CHANNELS)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.total_tiles:
            raise IndexError(f"tile index {index} out of range for {self.total_tiles} tiles")

    def cell(self, index: int) -> Tuple[int, int]:
        """Return `(col, row)` of a row-major tile index."""
        self._check_index(index)
        return index % self.x_split, index // self.x_split

    def tile_origin(self, index: int) -> Tuple[int, int]:
        """Return the top-left pixel `(x, y)` of a tile."""
        col, row = self.cell(index)
        return col * self.tile_width, row * self.tile_height

    def tile_rect(self, index: int) -> Tuple[int, int, int, int]:
        """Return `(x, y, width, height)` of a tile."""
        x, y = self.tile_origin(index)
        return x, y, self.tile_width, self.tile_height

    def tile_slices(self, index: int) -> Tuple[slice, slice]:
        """Return `(rows, cols)` slices selecting a tile from an HxWxC array."""
        x, y = self.tile_origin(index)
        return slice(y, y + self.tile_height), slice(x, x + self.tile_width)

    def tile_view(self, image: np.ndarray, index: int) -> np.ndarray:
        """Return a non-owning view of one tile of `image`."""
        ys, xs = self.tile_slices(index)
        return image[ys, xs]

    def tile_views(self, image: np.ndarray) -> List[np.ndarray]:
        """Return views of every tile in row-major order."""
        return [self.tile_view(image, i) for i in range(self.total_tiles)]


def compute_geometry(width: int, height: int, x_split: int, y_split: int) -> GridGeometry:
    """Validate divisibility and derive per-tile dimensions."""
    if x_split <= 0 or y_split <= 0:
        raise ValueError("x_split and y_split must be positive integers")
    if width % x_split != 0 or height % y_split != 0:
        raise DimensionMismatchError(width, height, x_split, y_split)

    geometry = GridGeometry(
        x_split=x_split,
        y_split=y_split,
        width=width,
        height=height,
        tile_width=width // x_split,
        tile_height=height // y_split,
    )
    logger.debug(
        f"Grid {x_split}x{y_split} over {width}x{height}: "
        f"tiles of {geometry.tile_width}x{geometry.tile_height}"
    )
    return geometry


def check_rgba(image: np.ndarray) -> None:
    """Raise ValueError unless `image` is an HxWx4 uint8 array."""
    if not isinstance(image, np.ndarray) or image.ndim != 3 or image.shape[2] != CHANNELS:
        raise ValueError("image must be an HxWx4 numpy array")
    if image.dtype != np.uint8:
        raise ValueError(f"image must have dtype uint8, got {image.dtype}")


def geometry_for_image(image: np.ndarray, x_split: int, y_split: int) -> GridGeometry:
    """Compute the geometry of an RGBA image buffer."""
    check_rgba(image)
    height, width, _ = image.shape
    return compute_geometry(width, height, x_split, y_split)
