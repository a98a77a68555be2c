"""
Rank-based color roles for extracted palettes.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .extraction import ExtractedColor
from .utils import hex_to_rgb

ROLE_BY_RANK = ("background", "primary", "secondary")
ACCENT_ROLE = "accent"


@dataclass(frozen=True)
class RoleColor:
    hex: str
    name: str
    role: str
    prominence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hex": self.hex,
            "name": self.name,
            "role": self.role,
            "prominence": self.prominence,
        }


def role_for_rank(rank: int) -> str:
    """Most dominant color is the background, then primary, secondary, accents."""
    if rank < 0:
        raise ValueError(f"rank must be non-negative, got {rank}")
    if rank < len(ROLE_BY_RANK):
        return ROLE_BY_RANK[rank]
    return ACCENT_ROLE


def assign_roles(colors: Sequence[ExtractedColor]) -> List[RoleColor]:
    """Label a frequency-ordered palette. Names are the hex codes themselves."""
    return [
        RoleColor(
            hex=color.hex,
            name=color.hex,
            role=role_for_rank(rank),
            prominence=color.percentage / 100,
        )
        for rank, color in enumerate(colors)
    ]


def denormalize_color_rows(save_id: str, colors: Sequence[RoleColor]) -> List[Dict[str, Any]]:
    """
    Flatten role colors into per-color rows for the persistence layer.

    Args:
        save_id: Identifier of the design record the colors belong to
        colors: Role-labelled palette in rank order

    Returns:
        One row per color with split RGB channels and its position
    """
    rows = []
    for position, color in enumerate(colors):
        r, g, b = hex_to_rgb(color.hex)
        rows.append({
            "save_id": save_id,
            "hex": color.hex,
            "rgb_r": r,
            "rgb_g": g,
            "rgb_b": b,
            "role": color.role,
            "prominence": color.prominence,
            "position": position,
        })
    return rows
