"""
Personal taste profile aggregation.

Builds the deterministic part of a user's taste profile from their completed
extraction records: tag and design-type distributions, typography
preferences, color tendencies and month-by-month dominant moods. The prose
summary comes from the language model; this module only renders its prompt.
"""
import json
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping

from loguru import logger

from design_dna.services.colors.errors import InvalidParameter
from design_dna.services.colors.tendencies import analyze_color_tendencies
from design_dna.services.colors.utils import round_half_up

STYLE_DISTRIBUTION_LIMIT = 10
TYPOGRAPHY_LIMIT = 6
VARIED_STYLE = "varied"


def _usable_records(records: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    return [record for record in records if record.get("extraction")]


def build_taste_profile(records: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Aggregate extraction records into a taste profile.

    Args:
        records: Items shaped ``{"extraction": {...}, "created_at": "YYYY-MM-DD..."}``
            in chronological order

    Returns:
        Dict with style_distribution, design_type_mix, typography_preferences,
        color_tendencies, taste_evolution and total_saves

    Raises:
        InvalidParameter: If no record carries an extraction
    """
    usable = _usable_records(records)
    if not usable:
        raise InvalidParameter("No completed extractions to build a taste profile from")

    tag_counts: Counter = Counter()
    type_counts: Counter = Counter()
    font_class_counts: Counter = Counter()
    month_moods: Dict[str, Counter] = {}
    all_colors: List[str] = []

    for record in usable:
        extraction = record["extraction"]
        mood_tags = extraction.get("mood_tags") or []

        for tag in [*mood_tags, *(extraction.get("style_tags") or [])]:
            tag_counts[tag] += 1

        if extraction.get("design_type"):
            type_counts[extraction["design_type"]] += 1

        for font in extraction.get("fonts") or []:
            font_class_counts[font.get("classification") or font.get("category") or "unknown"] += 1

        for color in extraction.get("colors") or []:
            if color.get("hex"):
                all_colors.append(color["hex"])

        month = str(record.get("created_at") or "")[:7]
        moods = month_moods.setdefault(month, Counter())
        for tag in mood_tags:
            moods[tag] += 1

    total = len(usable)

    # most_common keeps first-seen order among equal counts

    style_distribution = [
        {"tag": tag, "count": count, "percentage": round_half_up(count / total * 100)}
        for tag, count in tag_counts.most_common(STYLE_DISTRIBUTION_LIMIT)
    ]
    design_type_mix = [
        {"type": design_type, "count": count, "percentage": round_half_up(count / total * 100)}
        for design_type, count in type_counts.most_common()
    ]
    typography_preferences = [
        {"classification": classification, "count": count}
        for classification, count in font_class_counts.most_common(TYPOGRAPHY_LIMIT)
    ]
    taste_evolution = [
        {"month": month, "dominant_style": moods.most_common(1)[0][0] if moods else VARIED_STYLE}
        for month, moods in month_moods.items()
    ]

    logger.info(f"Built taste profile from {total} saves ({len(all_colors)} colors)")

    return {
        "style_distribution": style_distribution,
        "color_tendencies": analyze_color_tendencies(all_colors),
        "typography_preferences": typography_preferences,
        "design_type_mix": design_type_mix,
        "taste_evolution": taste_evolution,
        "total_saves": total,
    }


def build_taste_prompt(profile: Mapping[str, Any]) -> str:
    """Render the prompt asking the language model for a taste summary paragraph."""
    return (
        "You are a design taste analyst. Based on this user's design library data, write a "
        "personal, insightful taste summary paragraph (3-4 sentences).\n\n"
        f"Style distribution: {json.dumps(profile['style_distribution'])}\n"
        f"Design types: {json.dumps(profile['design_type_mix'])}\n"
        f"Typography: {json.dumps(profile['typography_preferences'])}\n"
        f"Color tendencies: {json.dumps(profile['color_tendencies'])}\n"
        f"Total saves: {profile['total_saves']}\n\n"
        "Write ONLY the paragraph, no quotes, no JSON. Reference actual patterns you see."
    )
