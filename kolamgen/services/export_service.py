"""Export rendered patterns as SVG, PNG or JSON."""

import logging
import math
from pathlib import Path
from typing import Optional, Union

import svgwrite
from PIL import Image, ImageDraw

from ..models.pattern import Curve, Dot, RenderedPattern
from ..models.render import RenderSettings
from ..utils.curve_utils import flatten_path, format_number, path_length, svg_path_data
from ..utils.image_utils import hex_to_rgba, save_image
from .animation_service import AnimationService, KolamAnimation

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("svg", "png", "json")


class ExportService:
    """Serializes a :class:`RenderedPattern` to vector, raster or JSON output.

    SVG and PNG draw the same elements in the same order (dots, then curves)
    so both formats show the same picture.
    """

    def __init__(self, animation_service: Optional[AnimationService] = None):
        self.animation = animation_service or AnimationService()

    # ------------------------------------------------------------------
    # SVG
    # ------------------------------------------------------------------

    def to_svg(self, pattern: RenderedPattern, settings: Optional[RenderSettings] = None) -> str:
        """Render the pattern as an SVG document string."""
        settings = settings or RenderSettings()
        width = pattern.dimensions.width
        height = pattern.dimensions.height

        dwg = svgwrite.Drawing(
            size=(format_number(width), format_number(height)),
            viewBox=f"0 0 {format_number(width)} {format_number(height)}",
            debug=False,
        )
        dwg.add(dwg.rect(insert=(0, 0), size=("100%", "100%"), fill=settings.background_color))

        plan: Optional[KolamAnimation] = None
        if settings.animation.enabled:
            plan = self.animation.plan(pattern, settings.animation)

        for dot in pattern.dots:
            dwg.add(self._svg_dot(dwg, dot, settings, plan))
        for curve in pattern.curves:
            dwg.add(self._svg_curve(dwg, curve, settings, plan))

        return dwg.tostring()

    def _svg_dot(self, dwg, dot: Dot, settings: RenderSettings, plan: Optional[KolamAnimation]):
        color = settings.dot_color or dot.color
        circle = dwg.circle(
            center=(dot.center.x, dot.center.y),
            r=settings.dot_radius or dot.radius,
            fill=color if dot.filled else "none",
            stroke=color,
            stroke_width=0 if dot.filled else 1,
            id=dot.id,
        )
        if plan is not None:
            step = plan.step_for(dot.id)
            circle["opacity"] = 0
            circle.add(self._svg_animate(dwg, "opacity", 0, 1, step.delay, step.duration, plan.loop))
        return circle

    def _svg_curve(self, dwg, curve: Curve, settings: RenderSettings, plan: Optional[KolamAnimation]):
        color = settings.stroke_color or curve.color
        stroke_width = settings.stroke_width or curve.stroke_width

        if len(curve.points) > 1:
            element = dwg.path(
                d=svg_path_data(curve.points),
                stroke=color,
                stroke_width=stroke_width,
                fill="none",
                stroke_linecap="round",
                stroke_linejoin="round",
                id=curve.id,
            )
        else:
            element = dwg.line(
                start=(curve.start.x, curve.start.y),
                end=(curve.end.x, curve.end.y),
                stroke=color,
                stroke_width=stroke_width,
                stroke_linecap="round",
                id=curve.id,
            )

        if plan is not None:
            step = plan.step_for(curve.id)
            length = format_number(path_length(curve.points))
            element["stroke-dasharray"] = length
            element["stroke-dashoffset"] = length
            element.add(self._svg_animate(
                dwg, "stroke-dashoffset", length, 0, step.delay, step.duration, plan.loop,
            ))
        return element

    @staticmethod
    def _svg_animate(dwg, attribute: str, start, end, delay: float, duration: float, loop: bool):
        anim = dwg.animate(
            attributeName=attribute,
            from_=start,
            to=end,
            begin=f"{format_number(delay)}ms",
            dur=f"{format_number(duration)}ms",
            fill="freeze",
        )
        if loop:
            anim["repeatCount"] = "indefinite"
        return anim

    # ------------------------------------------------------------------
    # PNG
    # ------------------------------------------------------------------

    def to_png(self, pattern: RenderedPattern, settings: Optional[RenderSettings] = None) -> Image.Image:
        """Rasterize the pattern with Pillow.

        Quadratic segments are flattened into polylines before drawing.
        """
        settings = settings or RenderSettings()
        scale = settings.scale
        size = (
            max(1, math.ceil(pattern.dimensions.width * scale)),
            max(1, math.ceil(pattern.dimensions.height * scale)),
        )

        canvas = Image.new("RGBA", size, hex_to_rgba(settings.background_color))
        draw = ImageDraw.Draw(canvas, "RGBA")

        for dot in pattern.dots:
            color = hex_to_rgba(settings.dot_color or dot.color)
            r = (settings.dot_radius or dot.radius) * scale
            x, y = dot.center.x * scale, dot.center.y * scale
            draw.ellipse(
                [x - r, y - r, x + r, y + r],
                fill=color if dot.filled else None,
                outline=color,
            )

        for curve in pattern.curves:
            color = hex_to_rgba(settings.stroke_color or curve.color)
            width = max(1, round((settings.stroke_width or curve.stroke_width) * scale))
            polyline = flatten_path(curve.points, settings.samples_per_segment) * scale
            if len(polyline) > 1:
                draw.line([tuple(p) for p in polyline], fill=color, width=width, joint="curve")
            else:
                draw.line(
                    [(curve.start.x * scale, curve.start.y * scale), (curve.end.x * scale, curve.end.y * scale)],
                    fill=color,
                    width=width,
                )

        return canvas

    # ------------------------------------------------------------------
    # JSON / files
    # ------------------------------------------------------------------

    def to_json(self, pattern: RenderedPattern) -> str:
        return pattern.to_json(indent=2)

    def save(
        self,
        pattern: RenderedPattern,
        path: Union[str, Path],
        settings: Optional[RenderSettings] = None,
        fmt: Optional[str] = None,
    ) -> Path:
        """Write the pattern to ``path``.

        The format is taken from ``fmt`` or else from the file suffix.

        Raises:
            ValueError: If the format is not one of svg, png or json.
        """
        path = Path(path)
        fmt = (fmt or path.suffix.lstrip(".")).lower()
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format '{fmt}' (expected one of {', '.join(EXPORT_FORMATS)})")

        if fmt == "png":
            save_image(self.to_png(pattern, settings), path)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = self.to_svg(pattern, settings) if fmt == "svg" else self.to_json(pattern)
            path.write_text(text)

        logger.info("Exported %s as %s to %s", pattern.id, fmt, path)
        return path
