"""
Style guide color evidence.

A style guide is synthesized from 3-10 saved designs. The consensus palette
computed here is handed to the language model verbatim so the guide is
grounded in literal, pixel-extracted hex values.
"""
import json
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from loguru import logger

from design_dna.config import config
from design_dna.services.colors.clustering import DEFAULT_TOP_K, ColorCluster, cluster_colors
from design_dna.services.colors.errors import InvalidParameter
from design_dna.services.fonts import google_fonts_css_url

HEADING_WEIGHTS = (400, 500, 600, 700)
BODY_WEIGHTS = (300, 400, 500, 600)


def validate_save_selection(save_ids: Sequence[str]) -> None:
    """Reject selections outside the supported 3-10 range."""
    if not (config.STYLE_GUIDE_MIN_SAVES <= len(save_ids) <= config.STYLE_GUIDE_MAX_SAVES):
        raise InvalidParameter(
            f"Select {config.STYLE_GUIDE_MIN_SAVES}-{config.STYLE_GUIDE_MAX_SAVES} saves, "
            f"got {len(save_ids)}"
        )


def collect_colors(extractions: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Flatten the color lists of every extraction, preserving order."""
    return [color for extraction in extractions for color in (extraction.get("colors") or [])]


def build_color_evidence(
    extractions: Sequence[Mapping[str, Any]],
    top_k: int = DEFAULT_TOP_K
) -> List[ColorCluster]:
    """
    Cluster the colors of the selected designs into a consensus palette.

    Raises:
        InvalidParameter: If fewer than the minimum number of extractions are usable
    """
    usable = [extraction for extraction in extractions if extraction]
    if len(usable) < config.STYLE_GUIDE_MIN_SAVES:
        raise InvalidParameter(
            f"Need at least {config.STYLE_GUIDE_MIN_SAVES} completed saves, got {len(usable)}"
        )

    clusters = cluster_colors(collect_colors(usable), top_k=top_k)
    logger.info(f"Style guide evidence: {len(clusters)} clusters from {len(usable)} designs")
    return clusters


def build_style_guide_prompt(
    extractions: Sequence[Mapping[str, Any]],
    clusters: Sequence[ColorCluster]
) -> str:
    """Render the style guide synthesis prompt with clusters as ground truth."""
    return (
        f"You are a design system expert. I have {len(extractions)} design inspirations. "
        "Analyze them together and synthesize a unified style guide.\n\n"
        "Here is the extraction data from each design:\n"
        f"{json.dumps(list(extractions), indent=2)}\n\n"
        "The most common pixel-extracted colors across all designs are:\n"
        f"{json.dumps([cluster.to_dict() for cluster in clusters], indent=2)}\n\n"
        "Respond ONLY with valid JSON containing color_palette, font_pairings, "
        "spacing_scale, design_principles, dos, donts and sample_components. "
        "Use ONLY real Google Fonts names in font_pairings."
    )


def add_font_urls(font_pairings: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Attach stylesheet URLs for each heading/body pairing."""
    return [
        {
            **pairing,
            "heading_url": google_fonts_css_url(pairing["heading"], HEADING_WEIGHTS),
            "body_url": google_fonts_css_url(pairing["body"], BODY_WEIGHTS),
        }
        for pairing in font_pairings
    ]
