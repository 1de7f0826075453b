"""Synthetic RGBA images for tests and benchmarks."""

from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np


def _with_alpha(rgb: np.ndarray) -> np.ndarray:
    alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb.astype(np.uint8), alpha], axis=2)


def generate_random_image(width: int = 300, height: int = 300, seed: int = 42) -> np.ndarray:
    """Generate a purely random opaque RGBA image."""
    rng = np.random.default_rng(seed)
    return _with_alpha(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def generate_solid_image(
    width: int, height: int, color: Tuple[int, int, int, int] = (0, 0, 0, 255)
) -> np.ndarray:
    """Generate a single-colour RGBA image."""
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :] = color
    return image


def generate_gradient_image(width: int = 256, height: int = 256) -> np.ndarray:
    """Generate a linear gradient: red follows x, green follows y.

    At 256 pixels per axis each step is exactly 1, so the seam between two
    tiles that were adjacent costs strictly less than any other pairing.
    """
    xs = np.arange(width, dtype=np.int64) * 255 // max(1, width - 1)
    ys = np.arange(height, dtype=np.int64) * 255 // max(1, height - 1)
    xv, yv = np.meshgrid(xs, ys)
    b = (xv + yv) // 2
    return _with_alpha(np.stack([xv, yv, b], axis=2))


def generate_natural_like_image(width: int = 300, height: int = 300, seed: int = 42) -> np.ndarray:
    """Generate a deterministic texture-rich image resembling a natural scene."""
    rng = np.random.default_rng(seed)
    base = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    smooth = cv2.GaussianBlur(base, (0, 0), sigmaX=6, sigmaY=6)
    detail = cv2.Canny(smooth, 60, 120)
    detail_rgb = cv2.cvtColor(detail, cv2.COLOR_GRAY2RGB)
    return _with_alpha(cv2.addWeighted(smooth, 0.85, detail_rgb, 0.15, 0))
