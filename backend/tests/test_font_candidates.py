"""
Tests for typography classification matching and Google Fonts links.
"""

import pytest

from design_dna.services.fonts import (
    DEFAULT_CLASSIFICATION, FONT_MAP, attach_candidates, get_candidate_fonts,
    google_fonts_css_url, match_classification
)


class TestGoogleFontsUrl:

    def test_default_weights(self):
        assert google_fonts_css_url("Inter") == (
            "https://fonts.googleapis.com/css2?family=Inter:wght@400;700&display=swap"
        )

    def test_spaces_are_encoded(self):
        url = google_fonts_css_url("Plus Jakarta Sans", [300, 500])
        assert "family=Plus+Jakarta+Sans:wght@300;500" in url

    def test_single_weight_family(self):
        url = google_fonts_css_url("Bebas Neue", None)
        assert url == "https://fonts.googleapis.com/css2?family=Bebas+Neue&display=swap"


class TestMatchClassification:

    @pytest.mark.parametrize("classification", ["slab serif", "Slab Serif", "  slab   serif "])
    def test_exact_match_is_normalized(self, classification):
        assert match_classification(classification) == "slab serif"

    @pytest.mark.parametrize("classification,expected", [
        ("humanist sans", "humanist sans-serif"),
        ("slab serif heading", "slab serif"),
        ("monospace code font", "monospace"),
        ("condensed grotesk sans", "condensed sans-serif"),
    ])
    def test_word_overlap(self, classification, expected):
        assert match_classification(classification) == expected

    def test_ties_prefer_earlier_keys(self):
        # "serif" scores one point for every serif-bearing key
        assert match_classification("old style serif") == "geometric sans-serif"

    def test_unknown_falls_back(self):
        assert match_classification("blackletter") == DEFAULT_CLASSIFICATION


class TestCandidateFonts:

    def test_every_class_has_candidates(self):
        assert len(FONT_MAP) == 11
        assert all(len(candidates) >= 3 for candidates in FONT_MAP.values())

    def test_geometric_candidates(self):
        candidates = get_candidate_fonts("geometric sans-serif")

        assert candidates[0].name == "Inter"
        assert candidates[0].google_fonts_url == "https://fonts.google.com/specimen/Inter"
        assert candidates[0].url.startswith("https://fonts.googleapis.com/css2?family=Inter")

    def test_system_font_has_no_links(self):
        helvetica = [c for c in get_candidate_fonts("neo-grotesque sans-serif") if c.name == "Helvetica Neue"]
        assert helvetica[0].url == ""
        assert helvetica[0].google_fonts_url == ""

    def test_empty_classification_uses_default(self):
        assert get_candidate_fonts("") == FONT_MAP[DEFAULT_CLASSIFICATION]

    def test_attach_candidates(self):
        fonts = [
            {"role": "heading", "classification": "modern serif", "weight": "700"},
            {"role": "body", "classification": None},
        ]

        enriched = attach_candidates(fonts)

        assert enriched[0]["role"] == "heading"
        assert enriched[0]["candidates"][0]["name"] == "Playfair Display"
        assert enriched[1]["candidates"][0]["name"] == "Inter"
        assert "candidates" not in fonts[0]
