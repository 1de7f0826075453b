"""Compose an output image by relocating tiles according to a permutation."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .errors import ConvertError
from .grid import GridGeometry

Permutation = Union[np.ndarray, Sequence[int]]


def arrange(image: np.ndarray, geometry: GridGeometry, permutation: Permutation) -> np.ndarray:
    """Copy source tile `permutation[d]` into destination tile `d` of a new image."""
    if image.shape[:2] != (geometry.height, geometry.width):
        raise ConvertError(
            f"image of size {image.shape[1]}x{image.shape[0]} does not match "
            f"geometry {geometry.width}x{geometry.height}"
        )
    indices = np.asarray(permutation)
    if indices.ndim != 1 or indices.shape[0] != geometry.total_tiles:
        raise ConvertError(
            f"expected {geometry.total_tiles} tile indices, got shape {indices.shape}"
        )

    canvas = np.zeros_like(image)
    for idx_to, idx_from in enumerate(indices.tolist()):
        if not 0 <= idx_from < geometry.total_tiles:
            raise ConvertError(f"source tile {idx_from} is out of bounds")
        canvas[geometry.tile_slices(idx_to)] = image[geometry.tile_slices(idx_from)]
    return canvas
