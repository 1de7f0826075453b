"""Encode (shuffle) and decode (reconstruct) whole images."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from .arranger import arrange
from .grid import geometry_for_image
from .permutation import PermutationSource
from .reconstructor import Reconstructor, ReconstructorConfig

logger = logging.getLogger(__name__)


def encode_with_permutation(
    image: np.ndarray,
    x_split: int,
    y_split: int,
    source: Optional[PermutationSource] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Shuffle the tiles of `image`; also return the permutation applied."""
    geometry = geometry_for_image(image, x_split, y_split)
    if source is None:
        source = PermutationSource.from_entropy()
    permutation = source.shuffled_permutation(geometry.total_tiles)
    logger.info(f"Encoding {geometry.total_tiles} tiles")
    return arrange(image, geometry, permutation), permutation


def decode_with_permutation(
    image: np.ndarray,
    x_split: int,
    y_split: int,
    config: Optional[ReconstructorConfig] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Reconstruct a shuffled image; also return the permutation found."""
    geometry = geometry_for_image(image, x_split, y_split)
    logger.info(f"Decoding {geometry.total_tiles} tiles")
    permutation = Reconstructor(config).reconstruct(image, geometry)
    return arrange(image, geometry, permutation), permutation


def encode_image(
    image: np.ndarray,
    x_split: int,
    y_split: int,
    source: Optional[PermutationSource] = None,
) -> np.ndarray:
    """Return a copy of `image` with its tiles randomly permuted."""
    return encode_with_permutation(image, x_split, y_split, source=source)[0]


def decode_image(
    image: np.ndarray,
    x_split: int,
    y_split: int,
    config: Optional[ReconstructorConfig] = None,
) -> np.ndarray:
    """Return a copy of `image` with tiles rearranged to minimise seam cost."""
    return decode_with_permutation(image, x_split, y_split, config=config)[0]
