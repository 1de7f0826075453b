"""Exception types raised by tile shuffling and reconstruction."""

from __future__ import annotations


class TileShuffleError(Exception):
    """Base class for every error surfaced by the package."""


class DimensionMismatchError(TileShuffleError, ValueError):
    """Image size is not divisible by the requested split counts."""

    def __init__(self, width: int, height: int, x_split: int, y_split: int) -> None:
        self.width = width
        self.height = height
        self.x_split = x_split
        self.y_split = y_split
        super().__init__(
            f"The dimensions of the image ({width}, {height}) "
            f"are not divisible by ({x_split}, {y_split})"
        )


class ConvertError(TileShuffleError):
    """A tile could not be copied into the output image."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to convert the image: {reason}")


class EntropyUnavailableError(TileShuffleError):
    """The operating system could not provide seed bytes."""


class ImageOpenError(TileShuffleError):
    """Failed to open an image file."""


class ImageDecodeError(TileShuffleError):
    """Image bytes could not be decoded."""


class ImageEncodeError(TileShuffleError):
    """Image could not be encoded to bytes."""


class ImageSaveError(TileShuffleError):
    """Failed to write an image file."""
