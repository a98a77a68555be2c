"""
Design DNA v1 API Routes
Color extraction, consensus clustering and library aggregation endpoints.
"""
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from design_dna.config import config
from design_dna.schemas import (
    ClusterRequest,
    ClusterResponse,
    ColorExtractResponse,
    FontCandidatesResponse,
    StyleGuideEvidenceRequest,
    StyleGuideEvidenceResponse,
    TasteProfileRequest,
    TasteProfileResponse,
    TendencyRequest,
    TendencyResponse,
)
from design_dna.services.colors import (
    MERGE_TOLERANCE,
    PIXEL_QUANT_STEP,
    DecodeError,
    InvalidParameter,
    analyze_color_tendencies,
    assign_roles,
    cluster_colors,
    extract_colors,
)
from design_dna.services.fonts import get_candidate_fonts, match_classification
from design_dna.services.imaging import ImageFetchError, fetch_image, read_upload
from design_dna.services.style_guide import (
    build_color_evidence,
    build_style_guide_prompt,
    validate_save_selection,
)
from design_dna.services.taste import build_taste_profile, build_taste_prompt
from design_dna.utils.ids import generate_request_id
from design_dna.utils.logging import get_logger
from design_dna.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Design DNA"])
logger = get_logger()


@router.post("/colors/extract",
             response_model=ColorExtractResponse,
             summary="Extract Design Palette",
             description="Extract dominant colors from an uploaded or linked design image")
async def extract_palette(
    file: Optional[UploadFile] = File(None, description="Image file (PNG, JPEG or WEBP)"),
    image_url: Optional[str] = Query(None, description="URL of an already stored image"),
    max_colors: int = Query(config.DEFAULT_MAX_COLORS, ge=1, le=config.MAX_COLORS_LIMIT, description="Maximum palette size")
) -> ColorExtractResponse:
    """
    Extract a palette in one of two input modes:

    **Upload:** multipart `file`
    **By URL:** `image_url` query parameter
    """
    request_id = generate_request_id("extract")
    metrics = get_metrics()
    start_time = time.time()

    if (file is None) == (image_url is None):
        raise HTTPException(status_code=400, detail="Provide exactly one of 'file' or 'image_url'")

    source = "upload" if file is not None else "url"
    request_logger = logger.bind(request_id=request_id, source=source)
    request_logger.info("Starting color extraction")

    try:
        if file is not None:
            image_bytes = await read_upload(file)
        else:
            image_bytes, _ = await run_in_threadpool(fetch_image, image_url)

        palette = await run_in_threadpool(
            extract_colors, image_bytes, max_colors, config.canvas_size
        )

    except HTTPException:
        metrics.increment_failure_count("color_extract", "policy")
        raise
    except ImageFetchError as e:
        metrics.increment_failure_count("color_extract", "fetch")
        request_logger.warning(f"Image fetch failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except DecodeError as e:
        metrics.increment_failure_count("color_extract", "decode")
        request_logger.warning(f"Image decode failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidParameter as e:
        metrics.increment_failure_count("color_extract", "parameter")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        metrics.increment_failure_count("color_extract", type(e).__name__.lower())
        request_logger.error(f"Color extraction failed: {str(e)}", extra={"error_type": type(e).__name__})
        raise HTTPException(status_code=500, detail="Extraction failed")

    duration_ms = (time.time() - start_time) * 1000
    metrics.increment_counter("color_extract_requests_total")
    metrics.increment_counter(f"color_extract_source_total_{source}")
    metrics.record_timing("color_extract", duration_ms)
    metrics.record_palette_size(len(palette))

    request_logger.info("Color extraction completed successfully",
                        extra={
                            "colors": len(palette),
                            "ms_total": duration_ms,
                            "result": "ok"
                        })

    return ColorExtractResponse(
        max_colors=max_colors,
        palette=[color.to_dict() for color in palette],
        colors=[role_color.to_dict() for role_color in assign_roles(palette)],
        debug={
            "request_id": request_id,
            "source": source,
            "canvas_size": list(config.canvas_size),
            "pixel_quant_step": PIXEL_QUANT_STEP,
            "merge_tolerance": MERGE_TOLERANCE,
            "duration_ms": duration_ms
        }
    )


@router.post("/colors/clusters",
             response_model=ClusterResponse,
             summary="Consensus Palette",
             description="Cluster colors from many extracted designs into a consensus palette")
async def cluster_palette(request: ClusterRequest) -> ClusterResponse:
    start_time = time.time()
    clusters = cluster_colors(request.colors, top_k=request.top_k)

    metrics = get_metrics()
    metrics.increment_counter("color_cluster_requests_total")
    metrics.record_timing("color_cluster", (time.time() - start_time) * 1000)

    return ClusterResponse(clusters=[cluster.to_dict() for cluster in clusters])


@router.post("/colors/tendencies",
             response_model=TendencyResponse,
             summary="Color Tendencies")
async def color_tendencies(request: TendencyRequest) -> TendencyResponse:
    return TendencyResponse(tendencies=analyze_color_tendencies(request.hex_colors))


@router.get("/fonts/candidates",
            response_model=FontCandidatesResponse,
            summary="Font Candidates",
            description="Google Fonts to compare against a classified text style")
async def font_candidates(
    classification: str = Query(..., min_length=1, max_length=80, description="Font style classification")
) -> FontCandidatesResponse:
    return FontCandidatesResponse(
        classification=classification,
        matched=match_classification(classification),
        candidates=[candidate.to_dict() for candidate in get_candidate_fonts(classification)]
    )


@router.post("/taste-profile",
             response_model=TasteProfileResponse,
             summary="Taste Profile")
async def taste_profile(request: TasteProfileRequest) -> TasteProfileResponse:
    try:
        profile = build_taste_profile([record.model_dump() for record in request.records])
    except InvalidParameter as e:
        raise HTTPException(status_code=400, detail=str(e))

    get_metrics().increment_counter("taste_profile_requests_total")
    return TasteProfileResponse(profile=profile, prompt=build_taste_prompt(profile))


@router.post("/style-guides/evidence",
             response_model=StyleGuideEvidenceResponse,
             summary="Style Guide Color Evidence")
async def style_guide_evidence(request: StyleGuideEvidenceRequest) -> StyleGuideEvidenceResponse:
    try:
        validate_save_selection(request.save_ids)
        clusters = build_color_evidence(request.extractions, top_k=request.top_k)
    except InvalidParameter as e:
        raise HTTPException(status_code=400, detail=str(e))

    get_metrics().increment_counter("style_guide_evidence_requests_total")
    return StyleGuideEvidenceResponse(
        clusters=[cluster.to_dict() for cluster in clusters],
        prompt=build_style_guide_prompt(request.extractions, clusters)
    )


@router.get("/metrics",
            summary="Service Metrics",
            description="In-process counters and timing statistics")
async def metrics_summary() -> Dict[str, Any]:
    return get_metrics().get_summary()
