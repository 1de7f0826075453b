"""Random tile permutations for the encode path."""

from __future__ import annotations

import os
from typing import Optional

import numpy as np

from .errors import EntropyUnavailableError

SEED_BYTES = 8


def _entropy_seed() -> int:
    try:
        buf = os.urandom(SEED_BYTES)
    except (NotImplementedError, OSError) as exc:
        raise EntropyUnavailableError("the OS could not provide random seed bytes") from exc
    return int.from_bytes(buf, "little")


class PermutationSource:
    """Owns a pseudo-random generator and draws uniform tile permutations.

    A source is not thread-safe; each thread of execution should hold its own.
    Not suitable for anything that needs unpredictability.
    """

    def __init__(self, rng: np.random.Generator, seed: Optional[int] = None) -> None:
        self.rng = rng
        self.seed = seed

    @classmethod
    def from_entropy(cls) -> "PermutationSource":
        """Seed a fresh generator from the OS entropy source."""
        seed = _entropy_seed()
        return cls(np.random.default_rng(seed), seed=seed)

    @classmethod
    def from_seed(cls, seed: int) -> "PermutationSource":
        """Create a reproducible source."""
        return cls(np.random.default_rng(seed), seed=seed)

    def shuffled_permutation(self, total_tiles: int) -> np.ndarray:
        """Return a uniformly random permutation of `range(total_tiles)`."""
        if total_tiles < 1:
            raise ValueError("total_tiles must be a positive integer")
        return self.rng.permutation(total_tiles).astype(np.intp)


def is_permutation(indices: np.ndarray, total_tiles: int) -> bool:
    """Check that `indices` holds each of `0..total_tiles-1` exactly once."""
    arr = np.asarray(indices)
    if arr.ndim != 1 or arr.shape[0] != total_tiles:
        return False
    return bool(np.array_equal(np.sort(arr), np.arange(total_tiles)))
