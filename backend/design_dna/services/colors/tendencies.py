"""
Coarse color tendencies (warm/cool, saturated/muted, light/dark) over a
library of extracted colors.
"""
from typing import Dict, Iterable, List, Union

from .utils import parse_hex, round_half_up

WARMTH_MARGIN = 20
SATURATION_THRESHOLD = 0.4
LIGHT_BRIGHTNESS_THRESHOLD = 160

CATEGORIES = ("Warm tones", "Cool tones", "Neutral", "Saturated", "Muted", "Light", "Dark")


def classify_color(r: int, g: int, b: int) -> List[str]:
    """Return the three categories (temperature, saturation, lightness) of one color."""
    if r > b + WARMTH_MARGIN:
        temperature = "Warm tones"
    elif b > r + WARMTH_MARGIN:
        temperature = "Cool tones"
    else:
        temperature = "Neutral"

    high, low = max(r, g, b), min(r, g, b)
    saturation = 0.0 if high == 0 else (high - low) / high
    saturation_class = "Saturated" if saturation > SATURATION_THRESHOLD else "Muted"

    brightness = (r + g + b) / 3
    lightness = "Light" if brightness > LIGHT_BRIGHTNESS_THRESHOLD else "Dark"

    return [temperature, saturation_class, lightness]


def analyze_color_tendencies(hex_colors: Iterable[str]) -> List[Dict[str, Union[str, int]]]:
    """
    Summarize a flat list of hex colors into fixed tendency categories.

    Malformed hex values are ignored. Percentages are relative to the number
    of parseable colors; an empty input yields zeros.
    """
    counts = {category: 0 for category in CATEGORIES}
    total = 0

    for hex_color in hex_colors:
        rgb = parse_hex(hex_color)
        if rgb is None:
            continue
        total += 1
        for category in classify_color(*rgb):
            counts[category] += 1

    denominator = total or 1
    return [
        {"category": category, "percentage": round_half_up(counts[category] / denominator * 100)}
        for category in CATEGORIES
    ]
