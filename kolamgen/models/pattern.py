"""Rendered pattern models: the compiled dot and curve geometry."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    """An absolute pixel position."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class PathPoint(BaseModel):
    """A curve point in absolute pixel space, with an optional control point."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    control_x: Optional[float] = None
    control_y: Optional[float] = None

    @property
    def has_control(self) -> bool:
        return self.control_x is not None and self.control_y is not None


class Dot(BaseModel):
    """A grid dot (pulli) placed at the center of an occupied cell."""

    model_config = ConfigDict(frozen=True)

    id: str
    center: Point
    radius: float = 3.0
    color: str = "#FFFFFF"
    filled: bool = True


class Curve(BaseModel):
    """The curve drawn for one tile placed at a specific cell."""

    model_config = ConfigDict(frozen=True)

    id: str
    row: int
    col: int
    tile_id: int
    start: PathPoint
    end: PathPoint
    points: tuple[PathPoint, ...]
    stroke_width: float = 1.5
    color: str = "#FFFFFF"


class Dimensions(BaseModel):
    """Overall pixel extent of a pattern."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float


class RenderedPattern(BaseModel):
    """Compiled kolam geometry, ready for a renderer or exporter.

    Built once per generation request and never mutated; regenerating a
    pattern produces a new instance.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rows: int = Field(..., ge=1)
    cols: int = Field(..., ge=1)
    cell_spacing: float = Field(..., gt=0)
    matrix: tuple[tuple[int, ...], ...] = Field(
        ...,
        description="Tile ids per cell, row-major",
    )
    dots: tuple[Dot, ...]
    curves: tuple[Curve, ...]
    dimensions: Dimensions

    @property
    def size(self) -> int:
        return max(self.rows, self.cols)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data: str) -> "RenderedPattern":
        """Deserialize from JSON produced by :meth:`to_json`."""
        return cls.model_validate_json(data)
