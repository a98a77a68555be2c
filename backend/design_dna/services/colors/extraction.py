"""
Color extraction service for design screenshots.

This module implements the per-image palette pipeline for Design DNA:
decode, crop-to-fill onto a small fixed canvas, grid quantization,
frequency counting, proximity merging and top-K selection. Everything is
deterministic; the same bytes always give the same palette.
"""

import io
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError
from loguru import logger

from .errors import DecodeError, InvalidParameter
from .utils import quantize_array, rgb_to_hex, round_half_up

# Algorithm constants
CANVAS_SIZE: Tuple[int, int] = (150, 150)
PIXEL_QUANT_STEP = 8
MERGE_TOLERANCE = 30
DEFAULT_MAX_COLORS = 8


@dataclass
class ColorBucket:
    """Accumulator for pixels that quantized to the same (or a nearby) color."""

    r: int
    g: int
    b: int
    count: int = 1

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def absorb(self, other: "ColorBucket") -> None:
        """Fold another bucket in: count-weighted average RGB, summed counts."""
        total = self.count + other.count
        self.r = round_half_up((self.r * self.count + other.r * other.count) / total)
        self.g = round_half_up((self.g * self.count + other.g * other.count) / total)
        self.b = round_half_up((self.b * self.count + other.b * other.count) / total)
        self.count = total


@dataclass(frozen=True)
class ExtractedColor:
    """One entry of a finalized per-image palette."""

    hex: str
    rgb: Tuple[int, int, int]
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        r, g, b = self.rgb
        return {
            "hex": self.hex,
            "rgb": {"r": r, "g": g, "b": b},
            "percentage": self.percentage,
        }


def _validate_params(max_colors: int, canvas_size: Sequence[int]) -> None:
    if isinstance(max_colors, bool) or not isinstance(max_colors, int) or max_colors <= 0:
        raise InvalidParameter(f"max_colors must be a positive integer, got {max_colors!r}")

    if len(canvas_size) != 2 or any(
        isinstance(edge, bool) or not isinstance(edge, int) or edge <= 0 for edge in canvas_size
    ):
        raise InvalidParameter(f"canvas_size must be two positive integers, got {canvas_size!r}")


def decode_image(image_bytes: bytes) -> Image.Image:
    """
    Decode raw encoded image bytes (PNG/JPEG/WEBP/...) into a PIL image.

    Args:
        image_bytes: Encoded image buffer

    Returns:
        Fully loaded PIL image with EXIF orientation applied

    Raises:
        InvalidParameter: If the input is not a bytes-like object
        DecodeError: If the bytes cannot be decoded as a raster image
    """
    if not isinstance(image_bytes, (bytes, bytearray, memoryview)):
        raise InvalidParameter(f"image_bytes must be bytes, got {type(image_bytes).__name__}")

    if len(image_bytes) == 0:
        raise DecodeError("Empty image buffer")

    try:
        image = Image.open(io.BytesIO(bytes(image_bytes)))
        image.load()
        image = ImageOps.exif_transpose(image)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, EOFError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    if image.width == 0 or image.height == 0:
        raise DecodeError("Decoded image has no pixels")

    return image


def to_eight_bit(image: Image.Image) -> Image.Image:
    """
    Scale 16-bit and 32-bit single-channel images down to 8-bit ``L``.

    ``I;16*`` and integer ``I`` images are read as 16-bit samples (divided by
    257). Float images in [0, 1] are stretched by 255; anything wider is read
    as 16-bit too. Other modes are returned unchanged.
    """
    if not (image.mode.startswith("I") or image.mode == "F"):
        return image

    samples = np.asarray(image, dtype=np.float64)
    if image.mode == "F" and samples.size and samples.max() <= 1.0:
        scaled = samples * 255
    else:
        scaled = samples / 257

    scaled = np.clip(np.floor(scaled + 0.5), 0, 255).astype(np.uint8)
    return Image.fromarray(scaled)


def fit_to_canvas(image: Image.Image, canvas_size: Tuple[int, int] = CANVAS_SIZE) -> Image.Image:
    """
    Crop-to-fill the image onto a fixed RGB canvas.

    The image is center-cropped to the canvas aspect ratio (never letterboxed)
    and resized. Downscaling averages areas (BOX); upscaling uses nearest
    neighbour so small inputs keep their exact color proportions. Alpha is
    dropped, not composited. High bit depth samples are scaled, not clipped.
    """
    image = to_eight_bit(image)
    if image.mode != "RGB":
        image = image.convert("RGB")

    width, height = canvas_size
    scale = max(width / image.width, height / image.height)
    method = Image.Resampling.NEAREST if scale > 1 else Image.Resampling.BOX

    return ImageOps.fit(image, (width, height), method=method)


def quantize_pixels(pixels: np.ndarray, step: int = PIXEL_QUANT_STEP) -> List[ColorBucket]:
    """
    Snap pixels to the quantization grid and count identical cells.

    Args:
        pixels: RGB pixels (N, 3) uint8
        step: Grid step per channel

    Returns:
        Buckets sorted by count (descending); equal counts keep the order in
        which their first pixel appears
    """
    if pixels.size == 0:
        return []

    keys = quantize_array(pixels.reshape(-1, 3), step)
    np.minimum(keys, 255, out=keys)

    unique_keys, first_index, counts = np.unique(
        keys, axis=0, return_index=True, return_counts=True
    )
    order = np.lexsort((first_index, -counts))

    return [
        ColorBucket(int(unique_keys[i, 0]), int(unique_keys[i, 1]), int(unique_keys[i, 2]), int(counts[i]))
        for i in order
    ]


def merge_similar_buckets(buckets: List[ColorBucket], tolerance: int = MERGE_TOLERANCE) -> List[ColorBucket]:
    """
    Fold visually identical buckets into the most dominant nearby one.

    Buckets are walked in the given (frequency-descending) order. Each is
    merged into the first already-accepted bucket whose channels all differ
    by less than ``tolerance``; otherwise it is accepted as a new bucket.
    The result is re-sorted by final count (stable).
    """
    merged: List[ColorBucket] = []
    representatives = np.zeros((len(buckets), 3), dtype=np.int32)

    for bucket in buckets:
        accepted = len(merged)
        if accepted:
            close = np.all(np.abs(representatives[:accepted] - np.array(bucket.rgb)) < tolerance, axis=1)
            hit = int(np.argmax(close))
            if close[hit]:
                target = merged[hit]
                target.absorb(bucket)
                representatives[hit] = target.rgb
                continue

        representatives[accepted] = bucket.rgb
        merged.append(ColorBucket(bucket.r, bucket.g, bucket.b, bucket.count))

    merged.sort(key=lambda bucket: -bucket.count)
    return merged


def extract_colors_from_image(
    image: Image.Image,
    max_colors: int = DEFAULT_MAX_COLORS,
    canvas_size: Tuple[int, int] = CANVAS_SIZE
) -> List[ExtractedColor]:
    """Run the palette pipeline on an already decoded image."""
    _validate_params(max_colors, canvas_size)
    start_time = time.time()

    original_size = image.size
    canvas = fit_to_canvas(image, tuple(canvas_size))
    pixels = np.asarray(canvas, dtype=np.uint8).reshape(-1, 3)
    total_pixels = pixels.shape[0]

    buckets = quantize_pixels(pixels, PIXEL_QUANT_STEP)
    logger.debug(f"Quantized {total_pixels} pixels into {len(buckets)} buckets")

    merged = merge_similar_buckets(buckets, MERGE_TOLERANCE)
    logger.debug(f"Merged {len(buckets)} buckets into {len(merged)}")

    palette = [
        ExtractedColor(
            hex=rgb_to_hex(bucket.rgb),
            rgb=bucket.rgb,
            percentage=round_half_up(bucket.count / total_pixels * 100),
        )
        for bucket in merged[:max_colors]
    ]

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Extracted {len(palette)} colors from {original_size[0]}x{original_size[1]} image "
        f"in {duration_ms:.1f}ms"
    )
    return palette


def extract_colors(
    image_bytes: bytes,
    max_colors: int = DEFAULT_MAX_COLORS,
    canvas_size: Tuple[int, int] = CANVAS_SIZE
) -> List[ExtractedColor]:
    """
    Extract the dominant colors of an encoded image.

    Args:
        image_bytes: Raw encoded image bytes
        max_colors: Upper bound on the number of colors returned
        canvas_size: (width, height) of the sampling canvas

    Returns:
        Colors ordered by descending frequency, at most ``max_colors`` long

    Raises:
        InvalidParameter: For a non-positive ``max_colors`` or bad canvas size
        DecodeError: If the bytes are not a decodable image
    """
    _validate_params(max_colors, canvas_size)
    image = decode_image(image_bytes)
    return extract_colors_from_image(image, max_colors, canvas_size)
