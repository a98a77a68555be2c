"""
Shared color helpers: hex encoding/decoding and half-up rounding.
"""
import math
import re
from typing import Optional, Sequence, Tuple

import numpy as np

HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def quantize_channel(value: float, step: int) -> int:
    """Snap a single channel value to the nearest multiple of ``step``."""
    return round_half_up(value / step) * step


def quantize_array(values: np.ndarray, step: int) -> np.ndarray:
    """Vectorized half-up quantization; returns int32 so 256 stays representable."""
    return (np.floor(values.astype(np.float64) / step + 0.5) * step).astype(np.int32)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Convert an RGB triple to a lowercase ``#rrggbb`` string."""
    r, g, b = [max(0, min(255, int(x))) for x in rgb]
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert a hex color string to an RGB tuple.

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    rgb = parse_hex(hex_color)
    if rgb is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return rgb


def parse_hex(hex_color: object) -> Optional[Tuple[int, int, int]]:
    """Lenient hex parser; returns None for anything that is not ``#rrggbb``."""
    if not isinstance(hex_color, str):
        return None
    match = HEX_PATTERN.match(hex_color.strip())
    if match is None:
        return None
    digits = match.group(1)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
