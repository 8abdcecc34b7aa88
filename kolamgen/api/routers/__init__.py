"""API routers for kolamgen."""

from . import patterns, tiles

__all__ = ["patterns", "tiles"]
