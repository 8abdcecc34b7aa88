"""Utility functions for kolam rendering."""

from .image_utils import hex_to_rgba, save_image
from .curve_utils import (
    flatten_path,
    format_number,
    path_length,
    sample_quadratic,
    svg_path_data,
)

__all__ = [
    "hex_to_rgba",
    "save_image",
    "flatten_path",
    "format_number",
    "path_length",
    "sample_quadratic",
    "svg_path_data",
]
