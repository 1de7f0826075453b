"""Grid geometry validation and tile addressing tests."""

from __future__ import annotations

import numpy as np
import pytest

from tileshuffle.errors import DimensionMismatchError
from tileshuffle.grid import compute_geometry, geometry_for_image
from tileshuffle.utils import generate_solid_image


def test_divisible_dimensions_produce_exact_tiles() -> None:
    """Tile sizes multiply back to the image size."""
    for width, height, x_split, y_split in [(256, 256, 4, 4), (300, 120, 5, 3), (7, 9, 7, 3)]:
        geometry = compute_geometry(width, height, x_split, y_split)
        assert geometry.tile_width * x_split == width
        assert geometry.tile_height * y_split == height


def test_mismatch_carries_input_values() -> None:
    """Non-divisible sizes fail with the exact inputs attached."""
    with pytest.raises(DimensionMismatchError) as info:
        compute_geometry(250, 256, 4, 4)
    err = info.value
    assert (err.width, err.height, err.x_split, err.y_split) == (250, 256, 4, 4)
    assert "(250, 256)" in str(err)
    assert "(4, 4)" in str(err)

    with pytest.raises(DimensionMismatchError):
        compute_geometry(256, 100, 4, 3)


def test_zero_split_is_rejected() -> None:
    """Split counts must be positive."""
    with pytest.raises(ValueError):
        compute_geometry(100, 100, 0, 4)
    with pytest.raises(ValueError):
        compute_geometry(100, 100, 4, -1)


def test_total_tiles_matches_split_product() -> None:
    """total_tiles is x_split * y_split for small and large grids."""
    for x_split, y_split in [(1, 1), (5, 3), (10, 10)]:
        geometry = compute_geometry(x_split * 12, y_split * 8, x_split, y_split)
        assert geometry.total_tiles == x_split * y_split


def test_tile_rect_is_row_major() -> None:
    """Tile index maps to (col, row) in row-major order."""
    geometry = compute_geometry(300, 120, 5, 3)
    assert geometry.tile_rect(0) == (0, 0, 60, 40)
    assert geometry.tile_rect(4) == (240, 0, 60, 40)
    assert geometry.tile_rect(5) == (0, 40, 60, 40)
    assert geometry.tile_rect(14) == (240, 80, 60, 40)
    with pytest.raises(IndexError):
        geometry.tile_rect(15)
    with pytest.raises(IndexError):
        geometry.tile_rect(-1)


def test_tile_views_share_memory() -> None:
    """Tile views are windows onto the image, not copies."""
    image = generate_solid_image(40, 20)
    geometry = geometry_for_image(image, 4, 2)
    views = geometry.tile_views(image)
    assert len(views) == 8
    assert all(view.shape == (10, 10, 4) for view in views)
    assert all(np.shares_memory(view, image) for view in views)


def test_geometry_for_image_requires_rgba() -> None:
    """Only HxWx4 uint8 buffers are accepted."""
    with pytest.raises(ValueError):
        geometry_for_image(np.zeros((8, 8, 3), dtype=np.uint8), 2, 2)
    with pytest.raises(ValueError):
        geometry_for_image(np.zeros((8, 8, 4), dtype=np.float32), 2, 2)
    geometry = geometry_for_image(np.zeros((8, 12, 4), dtype=np.uint8), 3, 2)
    assert (geometry.width, geometry.height) == (12, 8)
