"""Tile models for the kolam tile catalog."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CurvePoint(BaseModel):
    """A point on a tile curve, in cell-local units relative to the cell's dot.

    When ``control_x``/``control_y`` are set, the segment ending at this point
    is a quadratic Bezier through that control point.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    control_x: Optional[float] = None
    control_y: Optional[float] = None

    @property
    def has_control(self) -> bool:
        return self.control_x is not None and self.control_y is not None


class Tile(BaseModel):
    """One of the 16 canonical curve motifs drawn around a grid dot."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, le=16, description="Stable tile identifier")
    points: tuple[CurvePoint, ...] = Field(
        default=(),
        description="Ordered curve points (empty for the blank tile)",
    )
    touches_top_edge: bool = False
    touches_right_edge: bool = False
    touches_bottom_edge: bool = False
    touches_left_edge: bool = False

    @property
    def is_empty(self) -> bool:
        """True if the tile draws nothing and connects to no neighbor."""
        return not self.points and not self.connects_anywhere

    @property
    def connects_outward(self) -> bool:
        """Whether the curve continues into the cell to the right or below."""
        return self.touches_right_edge or self.touches_bottom_edge

    @property
    def connects_anywhere(self) -> bool:
        return (
            self.touches_top_edge
            or self.touches_right_edge
            or self.touches_bottom_edge
            or self.touches_left_edge
        )

    @property
    def edge_signature(self) -> str:
        """Compact edge summary such as ``"T-B-"`` (top, right, bottom, left)."""
        flags = (
            ("T", self.touches_top_edge),
            ("R", self.touches_right_edge),
            ("B", self.touches_bottom_edge),
            ("L", self.touches_left_edge),
        )
        return "".join(letter if on else "-" for letter, on in flags)
