"""
Design DNA API Schemas
Pydantic models for color extraction, clustering and aggregation request/response validation.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from design_dna.config import config

HEX_OUTPUT_PATTERN = r"^#[0-9a-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("design-dna", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# PER-IMAGE EXTRACTION
# ============================================================================

class RGBValue(BaseModel):
    """8-bit RGB triple."""
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class ExtractedColorEntry(BaseModel):
    """Single color in an extracted palette."""
    hex: str = Field(
        ...,
        pattern=HEX_OUTPUT_PATTERN,
        description="Lowercase hex color code in format #rrggbb"
    )
    rgb: RGBValue = Field(..., description="Color channels")
    percentage: int = Field(
        ...,
        ge=0,
        le=100,
        description="Share of canvas pixels in this color, rounded to an integer"
    )


class RoleColorEntry(BaseModel):
    """Palette color labelled with its rank-derived role."""
    hex: str = Field(..., pattern=HEX_OUTPUT_PATTERN)
    name: str = Field(..., description="Display name (the hex code)")
    role: str = Field(..., description="background, primary, secondary or accent")
    prominence: float = Field(..., ge=0.0, le=1.0, description="percentage / 100")


class ExtractDebug(BaseModel):
    """Parameters used for an extraction."""
    request_id: str = Field(..., description="Request ID for log correlation")
    source: str = Field(..., description="Input mode: 'upload' or 'url'")
    canvas_size: List[int] = Field(..., min_length=2, max_length=2, description="[width, height] of the sampling canvas")
    pixel_quant_step: int = Field(..., description="Intra-image quantization grid")
    merge_tolerance: int = Field(..., description="Per-channel merge tolerance")
    duration_ms: float = Field(..., description="Extraction time in milliseconds")


class ColorExtractResponse(BaseModel):
    """Main color extraction response."""
    max_colors: int = Field(..., description="Requested upper bound on palette size")
    palette: List[ExtractedColorEntry] = Field(
        ...,
        description="Palette ordered by frequency (most to least dominant)"
    )
    colors: List[RoleColorEntry] = Field(..., description="Palette with rank-derived roles")
    debug: ExtractDebug = Field(..., description="Debug information and parameters")


# ============================================================================
# CROSS-IMAGE CLUSTERING
# ============================================================================

class ClusterRequest(BaseModel):
    """Flattened color lists from many extracted designs."""
    colors: List[Any] = Field(
        default_factory=list,
        description="Stored color entries in order; entries without a valid 'hex' are skipped"
    )
    top_k: int = Field(config.DEFAULT_TOP_K, ge=1, le=64, description="Maximum clusters returned")


class ColorClusterEntry(BaseModel):
    """One consensus color."""
    hex: str = Field(..., pattern=HEX_OUTPUT_PATTERN)
    count: int = Field(..., ge=1, description="Number of source colors folded in")


class ClusterResponse(BaseModel):
    """Consensus clusters ordered by count."""
    clusters: List[ColorClusterEntry]


class TendencyRequest(BaseModel):
    hex_colors: List[str] = Field(default_factory=list, description="Flat list of hex colors")


class TendencyEntry(BaseModel):
    category: str
    percentage: int = Field(..., ge=0, le=100)


class TendencyResponse(BaseModel):
    tendencies: List[TendencyEntry]


# ============================================================================
# TYPOGRAPHY
# ============================================================================

class FontCandidateEntry(BaseModel):
    """A font to compare visually against a classified text style."""
    name: str
    url: str = Field(..., description="Stylesheet URL, empty for non-Google fonts")
    google_fonts_url: str = Field(..., description="Specimen page URL, empty for non-Google fonts")


class FontCandidatesResponse(BaseModel):
    classification: str = Field(..., description="Classification as received")
    matched: str = Field(..., description="Table key the classification resolved to")
    candidates: List[FontCandidateEntry]


# ============================================================================
# AGGREGATIONS
# ============================================================================

class ExtractionRecord(BaseModel):
    """A completed extraction with its creation timestamp."""
    extraction: Optional[Dict[str, Any]] = Field(None, description="Stored extraction data")
    created_at: str = Field("", description="ISO timestamp of the save")


class TasteProfileRequest(BaseModel):
    records: List[ExtractionRecord] = Field(default_factory=list, description="Records in chronological order")


class TasteProfileResponse(BaseModel):
    profile: Dict[str, Any]
    prompt: str = Field(..., description="Prompt for the narrative summary")


class StyleGuideEvidenceRequest(BaseModel):
    save_ids: List[str] = Field(..., description="Selected saves (3-10)")
    extractions: List[Dict[str, Any]] = Field(..., description="Extraction data of the selected saves")
    top_k: int = Field(config.DEFAULT_TOP_K, ge=1, le=64)


class StyleGuideEvidenceResponse(BaseModel):
    clusters: List[ColorClusterEntry]
    prompt: str = Field(..., description="Synthesis prompt with clusters as ground truth")
