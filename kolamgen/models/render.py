"""Render and animation settings for exporting patterns."""

from typing import Optional

from pydantic import BaseModel, Field


class AnimationSettings(BaseModel):
    """Staggered reveal animation for SVG output."""

    enabled: bool = Field(default=False, description="Animate the drawing")
    speed: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Drawing speed (1 = slowest, 10 = fastest)",
    )
    loop: bool = Field(default=False, description="Repeat the animation forever")


class RenderSettings(BaseModel):
    """Colors and sizes used when exporting a pattern.

    Color and size fields left as ``None`` fall back to the values carried by
    each dot and curve of the pattern.
    """

    background_color: str = Field(
        default="#7B3306",
        description="Canvas background (hex)",
    )
    stroke_color: Optional[str] = Field(default=None, description="Override curve color (hex)")
    dot_color: Optional[str] = Field(default=None, description="Override dot color (hex)")
    stroke_width: Optional[float] = Field(default=None, gt=0.0, le=20.0)
    dot_radius: Optional[float] = Field(default=None, gt=0.0, le=20.0)
    scale: float = Field(
        default=1.0,
        gt=0.0,
        le=8.0,
        description="Raster scale factor for PNG output",
    )
    samples_per_segment: int = Field(
        default=16,
        ge=2,
        le=128,
        description="Points sampled per Bezier segment when rasterizing",
    )
    animation: AnimationSettings = Field(default_factory=AnimationSettings)
