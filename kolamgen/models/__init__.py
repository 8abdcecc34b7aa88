"""Data models for kolam generation."""

from .tile import CurvePoint, Tile
from .pattern import Curve, Dimensions, Dot, PathPoint, Point, RenderedPattern
from .render import AnimationSettings, RenderSettings
from .design import KolamDesign

__all__ = [
    "CurvePoint",
    "Tile",
    "Curve",
    "Dimensions",
    "Dot",
    "PathPoint",
    "Point",
    "RenderedPattern",
    "AnimationSettings",
    "RenderSettings",
    "KolamDesign",
]
