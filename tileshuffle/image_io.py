"""Image file and byte-buffer I/O for RGBA buffers."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import cv2
import numpy as np

from .errors import (
    DimensionMismatchError,
    ImageDecodeError,
    ImageEncodeError,
    ImageOpenError,
    ImageSaveError,
)
from .pipeline import decode_image, encode_image

PathLike = Union[str, Path]

# cv2.imwrite cannot store an alpha channel in these formats.
_NO_ALPHA_SUFFIXES = {".jpg", ".jpeg", ".jpe", ".bmp", ".ppm", ".pgm", ".pbm"}


def _to_rgba8(image: np.ndarray) -> np.ndarray:
    """Convert a cv2-decoded array (grey, BGR, BGRA; 8/16 bit or float) to RGBA uint8."""
    if image.dtype == np.uint16:
        image = (image // 257).astype(np.uint8)
    elif np.issubdtype(image.dtype, np.floating):
        # HDR/EXR decode to floats in [0, 1].
        image = np.clip(np.nan_to_num(image) * 255.0 + 0.5, 0, 255).astype(np.uint8)
    elif image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    channels = image.shape[2]
    if channels == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    raise ImageDecodeError(f"unsupported channel count: {channels}")


def decode_image_bytes(buf: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGBA array."""
    data = np.frombuffer(buf, dtype=np.uint8)
    if data.size == 0:
        raise ImageDecodeError("Failed to decode the image: empty buffer")
    try:
        image = cv2.imdecode(data, cv2.IMREAD_UNCHANGED)
    except cv2.error as exc:
        raise ImageDecodeError(f"Failed to decode the image: {exc}") from exc
    if image is None:
        raise ImageDecodeError("Failed to decode the image: unrecognized format")
    return _to_rgba8(image)


def encode_png_bytes(image: np.ndarray) -> bytes:
    """Encode an RGBA array as PNG bytes."""
    ok, encoded = cv2.imencode(".png", cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise ImageEncodeError("Failed to encode the image as PNG")
    return encoded.tobytes()


def load_image(path: PathLike) -> np.ndarray:
    """Load an image file as an RGBA uint8 array."""
    path = Path(path)
    try:
        buf = path.read_bytes()
    except OSError as exc:
        raise ImageOpenError(f"Failed to open the image: {exc}") from exc
    return decode_image_bytes(buf)


def save_image(path: PathLike, image: np.ndarray) -> None:
    """Save an RGBA array; the format follows the file suffix."""
    path = Path(path)
    if path.suffix.lower() in _NO_ALPHA_SUFFIXES:
        out = cv2.cvtColor(image, cv2.COLOR_RGBA2BGR)
    else:
        out = cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        ok = cv2.imwrite(str(path), out)
    except (OSError, cv2.error) as exc:
        raise ImageSaveError(f"Failed to save the image: {exc}") from exc
    if not ok:
        raise ImageSaveError(f"Failed to save the image: could not write {path}")


def crop_to_grid(image: np.ndarray, x_split: int, y_split: int) -> np.ndarray:
    """Centre-crop `image` to the largest size divisible by the split counts."""
    if x_split <= 0 or y_split <= 0:
        raise ValueError("x_split and y_split must be positive integers")
    height, width = image.shape[:2]
    new_w = width - width % x_split
    new_h = height - height % y_split
    if new_w == 0 or new_h == 0:
        raise DimensionMismatchError(width, height, x_split, y_split)
    x0 = (width - new_w) // 2
    y0 = (height - new_h) // 2
    return image[y0 : y0 + new_h, x0 : x0 + new_w].copy()


def _check_splits(x_split: int, y_split: int) -> None:
    if x_split <= 0:
        raise ValueError("x_split must be a non-zero number")
    if y_split <= 0:
        raise ValueError("y_split must be a non-zero number")


def encode_image_buffer(buf: bytes, x_split: int, y_split: int) -> bytes:
    """Shuffle the tiles of an encoded image and return PNG bytes."""
    _check_splits(x_split, y_split)
    image = decode_image_bytes(buf)
    return encode_png_bytes(encode_image(image, x_split, y_split))


def decode_image_buffer(buf: bytes, x_split: int, y_split: int) -> bytes:
    """Reconstruct a shuffled encoded image and return PNG bytes."""
    _check_splits(x_split, y_split)
    image = decode_image_bytes(buf)
    return encode_png_bytes(decode_image(image, x_split, y_split))
