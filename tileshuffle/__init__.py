"""Tile shuffling and greedy tile-arrangement reconstruction for RGBA images."""

from .arranger import arrange
from .errors import (
    ConvertError,
    DimensionMismatchError,
    EntropyUnavailableError,
    ImageDecodeError,
    ImageEncodeError,
    ImageOpenError,
    ImageSaveError,
    TileShuffleError,
)
from .evaluator import EvaluationResult, PuzzleEvaluator
from .grid import GridGeometry, compute_geometry, geometry_for_image
from .matcher import BorderMatcher, CostAxis, Direction, border_cost
from .permutation import PermutationSource, is_permutation
from .pipeline import decode_image, decode_with_permutation, encode_image, encode_with_permutation
from .reconstructor import Candidate, Reconstructor, ReconstructorConfig, reconstruct

__all__ = [
    "GridGeometry",
    "compute_geometry",
    "geometry_for_image",
    "PermutationSource",
    "is_permutation",
    "arrange",
    "Direction",
    "CostAxis",
    "border_cost",
    "BorderMatcher",
    "ReconstructorConfig",
    "Candidate",
    "Reconstructor",
    "reconstruct",
    "encode_image",
    "decode_image",
    "encode_with_permutation",
    "decode_with_permutation",
    "EvaluationResult",
    "PuzzleEvaluator",
    "TileShuffleError",
    "DimensionMismatchError",
    "ConvertError",
    "EntropyUnavailableError",
    "ImageOpenError",
    "ImageDecodeError",
    "ImageEncodeError",
    "ImageSaveError",
]
