"""
Typography candidates for classified fonts.

The vision model only classifies a font's style (geometric sans-serif,
transitional serif, ...). This module turns that classification into a short
list of real Google Fonts the user can compare visually.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote_plus

GOOGLE_FONTS_CSS = "https://fonts.googleapis.com/css2"
GOOGLE_FONTS_SPECIMEN = "https://fonts.google.com/specimen"
DEFAULT_CLASSIFICATION = "geometric sans-serif"


@dataclass(frozen=True)
class FontCandidate:
    name: str
    url: str
    google_fonts_url: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "url": self.url, "google_fonts_url": self.google_fonts_url}


def google_fonts_css_url(family: str, weights: Optional[Sequence[int]] = (400, 700)) -> str:
    """Build a Google Fonts CSS2 stylesheet URL for one family."""
    family_param = quote_plus(family)
    if weights:
        family_param += ":wght@" + ";".join(str(weight) for weight in weights)
    return f"{GOOGLE_FONTS_CSS}?family={family_param}&display=swap"


def _google(name: str, weights: Optional[Sequence[int]] = (400, 700)) -> FontCandidate:
    return FontCandidate(
        name=name,
        url=google_fonts_css_url(name, weights),
        google_fonts_url=f"{GOOGLE_FONTS_SPECIMEN}/{quote_plus(name)}",
    )


def _system(name: str) -> FontCandidate:
    # Not on Google Fonts; no stylesheet to link
    return FontCandidate(name=name, url="", google_fonts_url="")


FONT_MAP: Dict[str, List[FontCandidate]] = {
    "geometric sans-serif": [
        _google("Inter"), _google("DM Sans"), _google("Outfit"), _google("Plus Jakarta Sans"),
        _google("Figtree"), _google("Poppins"), _google("Nunito Sans"), _google("Albert Sans"),
    ],
    "grotesque sans-serif": [
        _google("Space Grotesk"), _google("Manrope"), _google("Sora"),
        _google("General Sans"), _google("Satoshi"), _google("Geist"),
    ],
    "humanist sans-serif": [
        _google("Open Sans"), _google("Source Sans 3"), _google("Lato"),
        _google("Noto Sans"), _google("Cabin"),
    ],
    "neo-grotesque sans-serif": [
        _google("Roboto"), _system("Helvetica Neue"), _google("IBM Plex Sans"), _google("Work Sans"),
    ],
    "condensed sans-serif": [
        _google("Barlow Condensed"), _google("Oswald"), _google("Fjalla One", None), _google("Bebas Neue", None),
    ],
    "modern serif": [
        _google("Playfair Display"), _google("DM Serif Display", None),
        _google("Cormorant Garamond"), _google("Fraunces"),
    ],
    "transitional serif": [
        _google("Libre Baskerville"), _google("Lora"), _google("Merriweather"), _google("Source Serif 4"),
    ],
    "slab serif": [
        _google("Roboto Slab"), _google("Zilla Slab"), _google("Bitter"),
    ],
    "display": [
        _google("Righteous", None), _google("Fredoka"), _google("Unbounded"), _google("Space Mono"),
    ],
    "monospace": [
        _google("JetBrains Mono"), _google("Fira Code"), _google("Source Code Pro"), _google("IBM Plex Mono"),
    ],
    "handwriting": [
        _google("Caveat"), _google("Kalam"), _google("Patrick Hand", None),
    ],
}


def normalize_classification(classification: str) -> str:
    return " ".join(classification.lower().split())


def match_classification(classification: str) -> str:
    """
    Resolve a free-form classification to a key of FONT_MAP.

    Exact matches win. Otherwise each key scores the number of its words
    (split on spaces and hyphens) found in the classification; the highest
    score wins, earlier keys win ties. No overlap at all falls back to
    geometric sans-serif.
    """
    normalized = normalize_classification(classification)
    if normalized in FONT_MAP:
        return normalized

    best_match, best_score = "", 0
    for key in FONT_MAP:
        words = re.split(r"[\s-]+", key)
        score = sum(1 for word in words if word in normalized)
        if score > best_score:
            best_match, best_score = key, score

    return best_match if best_score > 0 else DEFAULT_CLASSIFICATION


def get_candidate_fonts(classification: str) -> List[FontCandidate]:
    """Candidate fonts for visual comparison against a classified text style."""
    return FONT_MAP[match_classification(classification or DEFAULT_CLASSIFICATION)]


def attach_candidates(fonts: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Copy each classified font dict and add its ``candidates`` list."""
    return [
        {
            **font,
            "candidates": [
                candidate.to_dict()
                for candidate in get_candidate_fonts(font.get("classification") or DEFAULT_CLASSIFICATION)
            ],
        }
        for font in fonts
    ]
