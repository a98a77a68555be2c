"""
Unit tests for rank-based color roles and library color tendencies.
"""

import pytest

from design_dna.services.colors import (
    ExtractedColor, analyze_color_tendencies, assign_roles, denormalize_color_rows, role_for_rank
)
from design_dna.services.colors.tendencies import CATEGORIES, classify_color


def palette_of(*entries):
    return [ExtractedColor(hex=h, rgb=(0, 0, 0), percentage=p) for h, p in entries]


class TestRoles:
    """Test role labelling by rank"""

    @pytest.mark.parametrize("rank,role", [
        (0, "background"),
        (1, "primary"),
        (2, "secondary"),
        (3, "accent"),
        (7, "accent"),
    ])
    def test_role_for_rank(self, rank, role):
        assert role_for_rank(rank) == role

    def test_negative_rank(self):
        with pytest.raises(ValueError):
            role_for_rank(-1)

    def test_assign_roles(self):
        palette = palette_of(("#f8f8f8", 55), ("#2060e8", 25), ("#181820", 12), ("#f87018", 8))

        roles = assign_roles(palette)

        assert [r.role for r in roles] == ["background", "primary", "secondary", "accent"]
        assert [r.name for r in roles] == ["#f8f8f8", "#2060e8", "#181820", "#f87018"]
        assert roles[0].prominence == pytest.approx(0.55)
        assert roles[3].prominence == pytest.approx(0.08)

    def test_assign_roles_empty(self):
        assert assign_roles([]) == []

    def test_to_dict(self):
        role = assign_roles(palette_of(("#000000", 100)))[0]
        assert role.to_dict() == {
            "hex": "#000000",
            "name": "#000000",
            "role": "background",
            "prominence": 1.0
        }


class TestDenormalizeColorRows:
    """Test flattening of role colors for persistence"""

    def test_rows_split_channels(self):
        roles = assign_roles(palette_of(("#0a141e", 70), ("#ff8000", 30)))

        rows = denormalize_color_rows("save-1", roles)

        assert rows[0] == {
            "save_id": "save-1",
            "hex": "#0a141e",
            "rgb_r": 10,
            "rgb_g": 20,
            "rgb_b": 30,
            "role": "background",
            "prominence": pytest.approx(0.7),
            "position": 0,
        }
        assert rows[1]["position"] == 1
        assert rows[1]["role"] == "primary"
        assert (rows[1]["rgb_r"], rows[1]["rgb_g"], rows[1]["rgb_b"]) == (255, 128, 0)


class TestColorTendencies:
    """Test coarse tendency summaries"""

    @pytest.mark.parametrize("rgb,expected", [
        ((255, 0, 0), ["Warm tones", "Saturated", "Dark"]),
        ((0, 0, 255), ["Cool tones", "Saturated", "Dark"]),
        ((240, 240, 240), ["Neutral", "Muted", "Light"]),
        ((0, 0, 0), ["Neutral", "Muted", "Dark"]),
        ((200, 180, 181), ["Neutral", "Muted", "Light"]),
    ])
    def test_classify_color(self, rgb, expected):
        assert classify_color(*rgb) == expected

    def test_fixed_category_order(self):
        result = analyze_color_tendencies(["#ff0000"])
        assert [entry["category"] for entry in result] == list(CATEGORIES)

    def test_percentages(self):
        result = analyze_color_tendencies(["#ff0000", "#f0f0f0", "#0000ff"])

        assert {entry["category"]: entry["percentage"] for entry in result} == {
            "Warm tones": 33,
            "Cool tones": 33,
            "Neutral": 33,
            "Saturated": 67,
            "Muted": 33,
            "Light": 33,
            "Dark": 67,
        }

    def test_malformed_values_ignored(self):
        result = analyze_color_tendencies(["#ff0000", "nope", None, "#12"])

        percentages = {entry["category"]: entry["percentage"] for entry in result}
        assert percentages["Warm tones"] == 100
        assert percentages["Saturated"] == 100

    def test_empty_input(self):
        result = analyze_color_tendencies([])
        assert all(entry["percentage"] == 0 for entry in result)
        assert len(result) == len(CATEGORIES)
