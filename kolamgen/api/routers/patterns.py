"""Pattern generation endpoints."""

from io import BytesIO
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response, StreamingResponse

from ...config import get_config
from ...models.render import AnimationSettings, RenderSettings
from ...services.export_service import ExportService
from ...services.generation_service import GenerationResult, GenerationService
from ..schemas import ErrorResponse, PatternResponse, SynthesisSummary

router = APIRouter()

ERROR_RESPONSES = {422: {"model": ErrorResponse, "description": "Invalid size or spacing"}}


def run_generation(size: int, seed: Optional[int], spacing: Optional[float]) -> GenerationResult:
    """Generate a pattern, mapping bad requests to HTTP 422.

    Raises:
        HTTPException: If the size or spacing is invalid, or the size exceeds
            the configured maximum.
    """
    config = get_config()
    if size > config.max_size:
        raise HTTPException(status_code=422, detail=f"Grid size {size} exceeds maximum of {config.max_size}")

    cell_spacing = spacing if spacing is not None else config.cell_spacing
    try:
        return GenerationService().generate(size, seed=seed, cell_spacing=cell_spacing)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _render_settings(animate: bool, speed: int) -> RenderSettings:
    config = get_config()
    return RenderSettings(
        background_color=config.background_color,
        stroke_color=config.stroke_color,
        animation=AnimationSettings(enabled=animate, speed=speed),
    )


@router.get("", response_model=PatternResponse, responses=ERROR_RESPONSES)
async def create_pattern(
    size: int = Query(..., description="Grid size (>= 2)"),
    seed: Optional[int] = Query(None, description="Random seed"),
    spacing: Optional[float] = Query(None, description="Pixels between dots"),
):
    """Generate a pattern and return its geometry."""
    result = run_generation(size, seed, spacing)
    return PatternResponse(
        pattern=result.pattern,
        synthesis=SynthesisSummary.from_report(result.report),
        generation_time=result.generation_time,
    )


@router.get("/svg", responses=ERROR_RESPONSES)
async def create_pattern_svg(
    size: int = Query(..., description="Grid size (>= 2)"),
    seed: Optional[int] = Query(None, description="Random seed"),
    spacing: Optional[float] = Query(None, description="Pixels between dots"),
    animate: bool = Query(False, description="Animate the drawing"),
    speed: int = Query(5, ge=1, le=10, description="Animation speed"),
):
    """Generate a pattern and return it as SVG."""
    result = run_generation(size, seed, spacing)
    svg = ExportService().to_svg(result.pattern, _render_settings(animate, speed))
    return Response(content=svg, media_type="image/svg+xml")


@router.get("/png", responses=ERROR_RESPONSES)
async def create_pattern_png(
    size: int = Query(..., description="Grid size (>= 2)"),
    seed: Optional[int] = Query(None, description="Random seed"),
    spacing: Optional[float] = Query(None, description="Pixels between dots"),
):
    """Generate a pattern and return it as PNG."""
    result = run_generation(size, seed, spacing)
    image = ExportService().to_png(result.pattern, _render_settings(False, 5))

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    buffer.seek(0)
    return StreamingResponse(buffer, media_type="image/png")
