"""API request/response models."""

from typing import Optional

from pydantic import BaseModel

from ..models.pattern import RenderedPattern
from ..models.tile import CurvePoint, Tile
from ..services.compatibility_service import CompatibilityRules
from ..services.synthesis_service import SynthesisReport


# =============================================================================
# Pattern Schemas
# =============================================================================


class SynthesisSummary(BaseModel):
    """Diagnostics from synthesizing a pattern."""

    size: int
    half_period: int
    seed: Optional[int] = None
    fallbacks: int = 0

    @classmethod
    def from_report(cls, report: SynthesisReport) -> "SynthesisSummary":
        return cls(
            size=report.size,
            half_period=report.half_period,
            seed=report.seed,
            fallbacks=report.fallbacks,
        )


class PatternResponse(BaseModel):
    """A generated pattern with its synthesis diagnostics."""

    pattern: RenderedPattern
    synthesis: SynthesisSummary
    generation_time: float


# =============================================================================
# Tile Schemas
# =============================================================================


class TileInfo(BaseModel):
    """A catalog tile with its derived symmetry and adjacency data."""

    id: int
    edges: str
    points: list[CurvePoint]
    horizontal_mirror: int
    vertical_mirror: int
    horizontal_self_inverse: bool
    vertical_self_inverse: bool
    compatible: list[int]

    @classmethod
    def from_tile(cls, tile: Tile, rules: CompatibilityRules) -> "TileInfo":
        return cls(
            id=tile.id,
            edges=tile.edge_signature,
            points=list(tile.points),
            horizontal_mirror=rules.mirror_horizontal(tile.id),
            vertical_mirror=rules.mirror_vertical(tile.id),
            horizontal_self_inverse=tile.id in rules.horizontal_self_inverse,
            vertical_self_inverse=tile.id in rules.vertical_self_inverse,
            compatible=sorted(rules.compatible_with(tile.id)),
        )


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str
