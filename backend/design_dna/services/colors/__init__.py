"""
Design DNA Colors Module

Provides deterministic per-image palette extraction, cross-image consensus
clustering, rank-based color roles and library-level color tendencies.
"""

from .errors import ColorPipelineError, DecodeError, InvalidParameter
from .extraction import (
    CANVAS_SIZE,
    DEFAULT_MAX_COLORS,
    MERGE_TOLERANCE,
    PIXEL_QUANT_STEP,
    ExtractedColor,
    extract_colors,
    extract_colors_from_image,
)
from .clustering import CLUSTER_QUANT_STEP, DEFAULT_TOP_K, ColorCluster, cluster_colors
from .roles import RoleColor, assign_roles, denormalize_color_rows, role_for_rank
from .tendencies import analyze_color_tendencies

__version__ = "1.0.0"

__all__ = [
    'ColorPipelineError', 'DecodeError', 'InvalidParameter',
    'CANVAS_SIZE', 'DEFAULT_MAX_COLORS', 'MERGE_TOLERANCE', 'PIXEL_QUANT_STEP',
    'ExtractedColor', 'extract_colors', 'extract_colors_from_image',
    'CLUSTER_QUANT_STEP', 'DEFAULT_TOP_K', 'ColorCluster', 'cluster_colors',
    'RoleColor', 'assign_roles', 'denormalize_color_rows', 'role_for_rank',
    'analyze_color_tendencies'
]
