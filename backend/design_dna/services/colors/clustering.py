"""
Cross-image color clustering.

Folds the palettes of many already-processed designs into a small consensus
palette. Colors are bucketed on a coarse 32-step grid and each bucket keeps
a running (incremental) average of the colors folded into it, so the final
representative can depend on input order. That order sensitivity is kept as
is; callers that need reproducible output must pass colors in a stable order.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from loguru import logger

from .errors import InvalidParameter
from .utils import parse_hex, quantize_channel, rgb_to_hex, round_half_up

CLUSTER_QUANT_STEP = 32
DEFAULT_TOP_K = 8


@dataclass
class ConsensusBucket:
    """Running-average accumulator for one coarse grid cell."""

    r: int
    g: int
    b: int
    count: int = 1

    def add(self, rgb: Tuple[int, int, int]) -> None:
        """Online mean update, rounded half-up after every fold."""
        self.count += 1
        previous = self.count - 1
        self.r = round_half_up((self.r * previous + rgb[0]) / self.count)
        self.g = round_half_up((self.g * previous + rgb[1]) / self.count)
        self.b = round_half_up((self.b * previous + rgb[2]) / self.count)


@dataclass(frozen=True)
class ColorCluster:
    """One consensus color and how many source colors fell into it."""

    hex: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"hex": self.hex, "count": self.count}


def _hex_of(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        return item.get("hex")
    return getattr(item, "hex", None)


def bucket_key(rgb: Tuple[int, int, int], step: int = CLUSTER_QUANT_STEP) -> Tuple[int, int, int]:
    """Grid cell for a color; channels may land on 256."""
    return tuple(quantize_channel(channel, step) for channel in rgb)


def cluster_colors(colors: Iterable[Any], top_k: int = DEFAULT_TOP_K) -> List[ColorCluster]:
    """
    Merge colors from many palettes into consensus clusters.

    Args:
        colors: Items carrying a hex color, either mappings with a ``"hex"``
            key or objects with a ``hex`` attribute
        top_k: Maximum number of clusters returned

    Returns:
        Clusters ordered by descending count; ties keep first-seen order

    Raises:
        InvalidParameter: If ``top_k`` is not a positive integer
    """
    if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0:
        raise InvalidParameter(f"top_k must be a positive integer, got {top_k!r}")

    buckets: Dict[Tuple[int, int, int], ConsensusBucket] = {}
    skipped = 0

    for item in colors:
        rgb = parse_hex(_hex_of(item))
        if rgb is None:
            skipped += 1
            continue

        key = bucket_key(rgb)
        existing = buckets.get(key)
        if existing is not None:
            existing.add(rgb)
        else:
            buckets[key] = ConsensusBucket(*rgb)

    if skipped:
        logger.debug(f"Skipped {skipped} entries without a valid hex color")

    ranked = sorted(buckets.values(), key=lambda bucket: -bucket.count)
    return [
        ColorCluster(hex=rgb_to_hex((bucket.r, bucket.g, bucket.b)), count=bucket.count)
        for bucket in ranked[:top_k]
    ]
