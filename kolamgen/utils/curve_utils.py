"""Quadratic Bezier helpers shared by the SVG and raster exporters."""

from typing import Sequence

import numpy as np

from ..models.pattern import PathPoint

# Minimum path length reported for very short curves (keeps dash animations visible).
MIN_PATH_LENGTH = 50.0


def format_number(value: float) -> str:
    """Format a coordinate compactly: ``60.0 -> "60"``, ``42.5 -> "42.5"``."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def segment_control(prev: PathPoint, point: PathPoint) -> tuple[float, float]:
    """Control point for the quadratic segment ending at ``point``.

    Uses the point's own control when present, otherwise the midpoint of the
    segment (which draws a straight line).
    """
    if point.has_control:
        return point.control_x, point.control_y
    return (prev.x + point.x) / 2, (prev.y + point.y) / 2


def svg_path_data(points: Sequence[PathPoint]) -> str:
    """Build an SVG path ``d`` attribute from curve points."""
    if not points:
        return ""

    parts = [f"M {format_number(points[0].x)} {format_number(points[0].y)}"]
    for prev, point in zip(points, points[1:]):
        cx, cy = segment_control(prev, point)
        parts.append(
            f"Q {format_number(cx)} {format_number(cy)} "
            f"{format_number(point.x)} {format_number(point.y)}"
        )
    return " ".join(parts)


def sample_quadratic(
    p0: tuple[float, float],
    control: tuple[float, float],
    p1: tuple[float, float],
    samples: int = 16,
) -> np.ndarray:
    """Sample a quadratic Bezier, endpoints included.

    Returns:
        Array of shape (samples, 2).
    """
    t = np.linspace(0.0, 1.0, samples)[:, np.newaxis]
    a = np.asarray(p0, dtype=float)
    c = np.asarray(control, dtype=float)
    b = np.asarray(p1, dtype=float)
    return (1 - t) ** 2 * a + 2 * (1 - t) * t * c + t ** 2 * b


def flatten_path(points: Sequence[PathPoint], samples_per_segment: int = 16) -> np.ndarray:
    """Approximate a curve by a polyline.

    Returns:
        Array of shape (n, 2); a single point for one-point curves, empty for
        no points.
    """
    if not points:
        return np.empty((0, 2))
    if len(points) == 1:
        return np.array([[points[0].x, points[0].y]])

    pieces = [np.array([[points[0].x, points[0].y]])]
    for prev, point in zip(points, points[1:]):
        sampled = sample_quadratic(
            (prev.x, prev.y),
            segment_control(prev, point),
            (point.x, point.y),
            samples_per_segment,
        )
        pieces.append(sampled[1:])
    return np.vstack(pieces)


def path_length(points: Sequence[PathPoint]) -> float:
    """Length of the straight polyline through the points, at least MIN_PATH_LENGTH."""
    if len(points) < 2:
        return MIN_PATH_LENGTH
    xy = np.array([[p.x, p.y] for p in points])
    length = float(np.sum(np.hypot(*np.diff(xy, axis=0).T)))
    return max(length, MIN_PATH_LENGTH)
